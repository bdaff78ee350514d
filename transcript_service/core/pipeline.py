"""
Transcript acquisition pipeline.

Tiers run in a fixed order: stored transcript, public captions, then
speech recognition on downloaded audio. Summaries are generated on demand
and cached on the stored record; notes are generated fresh each time.
"""

from pathlib import Path
from typing import Any, BinaryIO, ContextManager, Dict, List, Optional, Protocol

from sqlalchemy.orm import Session

from transcript_service.core.normalizer import (
    join_segments,
    normalize_captions,
    normalize_recognition_result,
)
from transcript_service.core.video_reference import resolve_video_id
from transcript_service.db import crud
from transcript_service.db.models import TranscriptRecord
from transcript_service.models.schemas import (
    AcquisitionResult,
    NotesResult,
    Segment,
    SummaryResult,
    SummarySource,
    TranscriptRecordOut,
    TranscriptSource,
)
from transcript_service.utils.error_handling import (
    AcquisitionFailed,
    CaptionsUnavailable,
    ConfigurationError,
    InvalidReference,
    NotFound,
)
from transcript_service.utils.locking import KeyedLock
from transcript_service.utils.logger import logging


class Scraper(Protocol):
    def fetch(self, video_id: str) -> List[Dict[str, Any]]: ...


class AudioSource(Protocol):
    def fetch(self, video_id: str) -> ContextManager[Path]: ...


class Transcriber(Protocol):
    def ensure_ready(self) -> None: ...

    def transcribe(self, stream: BinaryIO, filename: str) -> Dict[str, Any]: ...


class Summarizer(Protocol):
    def summarize(self, transcript_text: str) -> str: ...

    def generate_notes(self, transcript_text: str) -> str: ...


# Shared by every pipeline in the process so concurrent requests for the
# same video wait for each other instead of repeating the expensive tiers.
_inflight = KeyedLock()


class TranscriptPipeline:
    """Sequence the acquisition tiers and summary generation for one request."""

    def __init__(
        self,
        db: Session,
        scraper: Scraper,
        audio_fetcher: AudioSource,
        transcriber: Transcriber,
        summarizer: Summarizer,
        locks: Optional[KeyedLock] = None,
    ):
        self.db = db
        self.scraper = scraper
        self.audio_fetcher = audio_fetcher
        self.transcriber = transcriber
        self.summarizer = summarizer
        self.locks = locks or _inflight

    @staticmethod
    def resolve(video_ref: str) -> str:
        video_id = resolve_video_id(video_ref)
        if video_id is None:
            raise InvalidReference(f"Could not resolve a YouTube video ID from {video_ref!r}")
        return video_id

    def acquire_transcript(self, video_ref: str) -> AcquisitionResult:
        """
        Return the transcript for a video, acquiring and storing it if needed.

        Args:
            video_ref: Any YouTube URL form or a bare video ID

        Returns:
            AcquisitionResult naming the tier that produced the transcript

        Raises:
            InvalidReference: if no video ID can be resolved
            AcquisitionFailed: if every tier failed
            ConfigurationError: if speech recognition is needed but not configured
        """
        video_id = self.resolve(video_ref)

        with self.locks.hold(video_id):
            record = crud.find_by_video_id(self.db, video_id)
            if record is not None:
                logging.info(f"[{video_id}] Transcript served from cache")
                return self._result(record, TranscriptSource.CACHE)

            segments = self._scrape(video_id)
            if segments:
                return self._persist(video_id, segments, TranscriptSource.SCRAPE)

            segments = self._transcribe_audio(video_id)
            if not segments:
                logging.warning(f"[{video_id}] No speech detected in audio")
                return AcquisitionResult(video_id=video_id, source=TranscriptSource.AI, full_text="", segments=[])
            return self._persist(video_id, segments, TranscriptSource.AI)

    def _scrape(self, video_id: str) -> List[Segment]:
        try:
            snippets = self.scraper.fetch(video_id)
        except CaptionsUnavailable as e:
            logging.info(f"[{video_id}] Captions unavailable, falling back to speech recognition")
            logging.debug(f"[{video_id}] Caption failure: {e}")
            return []
        return normalize_captions(snippets)

    def _transcribe_audio(self, video_id: str) -> List[Segment]:
        self.transcriber.ensure_ready()

        try:
            with self.audio_fetcher.fetch(video_id) as audio_path:
                with open(audio_path, "rb") as stream:
                    result = self.transcriber.transcribe(stream, Path(audio_path).name)
        except ConfigurationError:
            raise
        except Exception as e:
            logging.debug(f"[{video_id}] Speech recognition tier failed: {type(e).__name__}")
            raise AcquisitionFailed(video_id, e) from e

        return normalize_recognition_result(result)

    def _persist(self, video_id: str, segments: List[Segment], source: TranscriptSource) -> AcquisitionResult:
        record, created = crud.get_or_create_transcript(
            self.db, video_id, join_segments(segments), segments
        )
        if not created:
            return self._result(record, TranscriptSource.CACHE)

        logging.info(f"[{video_id}] Stored {len(segments)} segments from {source.value}")
        return self._result(record, source)

    @staticmethod
    def _result(record: TranscriptRecord, source: TranscriptSource) -> AcquisitionResult:
        return AcquisitionResult(
            video_id=record.video_id,
            source=source,
            full_text=record.full_text,
            segments=[Segment.model_validate(segment) for segment in record.segments or []],
        )

    def _find(self, id_or_video_id: str) -> TranscriptRecord:
        record = crud.find_by_id_or_video_id(self.db, id_or_video_id)
        if record is None:
            raise NotFound(f"Transcript {id_or_video_id} not found")
        return record

    def get_transcript(self, id_or_video_id: str) -> TranscriptRecordOut:
        """Look up a stored transcript by record ID or video ID."""
        return TranscriptRecordOut.model_validate(self._find(id_or_video_id))

    def generate_summary(self, id_or_video_id: str) -> SummaryResult:
        """
        Return the summary of a stored transcript, generating it once.

        A cached summary is returned without calling the LLM.
        """
        video_id = self._find(id_or_video_id).video_id

        with self.locks.hold(f"summary:{video_id}"):
            record = crud.find_by_video_id(self.db, video_id)
            self.db.refresh(record)
            if record.summary and record.summary.strip():
                return SummaryResult(source=SummarySource.CACHE, summary=record.summary)

            summary = self.summarizer.summarize(record.full_text)
            if record.full_text.strip():
                crud.attach_summary(self.db, video_id, summary)
            logging.info(f"[{video_id}] Summary generated")
            return SummaryResult(source=SummarySource.GENERATED, summary=summary)

    def generate_notes(self, video_ref: str) -> NotesResult:
        """Generate study notes for a video, acquiring its transcript first."""
        acquisition = self.acquire_transcript(video_ref)
        notes = self.summarizer.generate_notes(acquisition.full_text)
        return NotesResult(notes=notes)


def build_pipeline(db: Session) -> TranscriptPipeline:
    """Create a pipeline wired to the production providers."""
    from transcript_service.core.audio_fetcher import AudioFetcher
    from transcript_service.core.caption_scraper import CaptionScraper
    from transcript_service.core.summarizer import TranscriptSummarizer
    from transcript_service.core.transcriber import SpeechTranscriber

    return TranscriptPipeline(
        db=db,
        scraper=CaptionScraper(),
        audio_fetcher=AudioFetcher(),
        transcriber=SpeechTranscriber(),
        summarizer=TranscriptSummarizer(),
    )
