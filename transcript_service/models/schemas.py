"""
Data models for the transcript acquisition service.
"""
import datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from transcript_service.config import config


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TranscriptSource(str, Enum):
    """Tier that produced a transcript."""
    CACHE = "cache"
    SCRAPE = "scrape"
    AI = "ai"


class SummarySource(str, Enum):
    """Origin of a returned summary."""
    CACHE = "cache"
    GENERATED = "generated"


class Segment(CamelModel):
    """A single time-bounded unit of transcript text, in milliseconds."""
    text: str
    offset_ms: int = Field(ge=0)
    duration_ms: int = Field(ge=0)


class TranscriptionConfig(BaseModel):
    """Configuration for speech-recognition requests."""
    model: str = config.DEFAULT_TRANSCRIPTION_MODEL
    language: Optional[str] = None
    prompt: Optional[str] = None
    response_format: str = "verbose_json"
    temperature: float = 0.0
    timestamp_granularities: List[str] = ["word", "segment"]
    timeout: float = config.TRANSCRIPTION_TIMEOUT


class AudioDownloadConfig(BaseModel):
    """Configuration for the audio download process."""
    output_directory: str = str(config.TEMP_DIR)
    audio_format: str = "worstaudio"
    extension: str = "m4a"
    ffmpeg_location: Optional[str] = config.FFMPEG_LOCATION
    binary: Optional[str] = config.YT_DLP_BINARY
    timeout: float = config.DOWNLOAD_TIMEOUT
    headers: List[str] = ["referer:youtube.com", "user-agent:googlebot"]


class SummaryConfig(BaseModel):
    """Configuration for summary and notes generation."""
    model: str = config.DEFAULT_SUMMARY_MODEL
    temperature: float = 0.2
    max_tokens: int = 2048
    notes_max_tokens: int = 4096
    chunk_size: int = 24000
    chunk_overlap: int = 800
    timeout: float = config.LLM_TIMEOUT


class AcquisitionResult(CamelModel):
    """Outcome of acquiring a transcript for one video."""
    video_id: str
    source: TranscriptSource
    full_text: str
    segments: List[Segment] = []


class SummaryResult(CamelModel):
    """A summary together with where it came from."""
    source: SummarySource
    summary: str


class NotesResult(CamelModel):
    """Generated study notes."""
    notes: str


class TranscriptRecordOut(CamelModel):
    """Read model of a stored transcript record."""
    id: int
    video_id: str
    full_text: str
    segments: List[Segment] = []
    summary: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None
