"""
API routes for the transcript acquisition service.

Route handlers are plain functions so FastAPI runs the blocking pipeline
in its worker threadpool.
"""

from fastapi import APIRouter, Depends, Path

from transcript_service.api.schemas import VideoRequest, ErrorResponse
from transcript_service.core.pipeline import TranscriptPipeline, build_pipeline
from transcript_service.db.database import get_db, DBSession
from transcript_service.models.schemas import (
    AcquisitionResult,
    NotesResult,
    SummaryResult,
    TranscriptRecordOut,
)
from transcript_service.utils.logger import logging

router = APIRouter(prefix="/api/v1", tags=["transcripts"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def get_pipeline(db: DBSession = Depends(get_db)) -> TranscriptPipeline:
    """Build a pipeline bound to the request's database session."""
    return build_pipeline(db)


@router.post("/transcripts/youtube", response_model=AcquisitionResult, responses=ERROR_RESPONSES)
def acquire_transcript(request: VideoRequest, pipeline: TranscriptPipeline = Depends(get_pipeline)):
    """
    Acquire the transcript of a YouTube video.

    - Returns the stored transcript when the video was processed before
    - Otherwise tries public captions, then speech recognition on the audio
    """
    logging.info(f"Transcript requested for: {request.url}")
    return pipeline.acquire_transcript(request.url)


@router.get("/transcripts/{transcript_id}", response_model=TranscriptRecordOut, responses=ERROR_RESPONSES)
def get_transcript(
    transcript_id: str = Path(..., description="Record ID or YouTube video ID"),
    pipeline: TranscriptPipeline = Depends(get_pipeline),
):
    """Get a stored transcript by record ID or video ID."""
    return pipeline.get_transcript(transcript_id)


@router.post("/transcripts/{transcript_id}/summary", response_model=SummaryResult, responses=ERROR_RESPONSES)
def generate_summary(
    transcript_id: str = Path(..., description="Record ID or YouTube video ID"),
    pipeline: TranscriptPipeline = Depends(get_pipeline),
):
    """Get the summary of a stored transcript, generating and caching it on first request."""
    return pipeline.generate_summary(transcript_id)


@router.post("/notes", response_model=NotesResult, responses=ERROR_RESPONSES)
def generate_notes(request: VideoRequest, pipeline: TranscriptPipeline = Depends(get_pipeline)):
    """Generate structured study notes for a YouTube video."""
    return pipeline.generate_notes(request.url)
