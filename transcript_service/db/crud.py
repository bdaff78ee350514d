"""
CRUD operations for the transcript store.
"""

from typing import List, Optional, Dict, Any, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from transcript_service.db.models import TranscriptRecord
from transcript_service.models.schemas import Segment
from transcript_service.utils.error_handling import ConflictError, NotFound
from transcript_service.utils.logger import logging


def find_by_video_id(db: Session, video_id: str) -> Optional[TranscriptRecord]:
    """Get a transcript record by video ID."""
    return db.query(TranscriptRecord).filter(TranscriptRecord.video_id == video_id).first()


def find_by_id_or_video_id(db: Session, value: str) -> Optional[TranscriptRecord]:
    """Get a transcript record by its numeric ID, falling back to the video ID."""
    value = (value or "").strip()
    if value.isdigit():
        record = db.get(TranscriptRecord, int(value))
        if record is not None:
            return record
    return find_by_video_id(db, value)


def _serialize_segments(segments: List[Segment]) -> List[Dict[str, Any]]:
    return [segment.model_dump() for segment in segments]


def create_transcript(db: Session, video_id: str, full_text: str,
                      segments: List[Segment]) -> TranscriptRecord:
    """
    Create a transcript for a video.

    Raises:
        ConflictError: if a record for the video already exists
    """
    if find_by_video_id(db, video_id) is not None:
        raise ConflictError(f"Transcript for video {video_id} already exists")

    record = TranscriptRecord(
        video_id=video_id,
        full_text=full_text,
        segments=_serialize_segments(segments),
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"Transcript for video {video_id} already exists") from e
    db.refresh(record)
    return record


def get_or_create_transcript(db: Session, video_id: str, full_text: str,
                             segments: List[Segment]) -> Tuple[TranscriptRecord, bool]:
    """
    Create a transcript unless one already exists.

    Returns:
        The stored record and whether this call created it
    """
    try:
        return create_transcript(db, video_id, full_text, segments), True
    except ConflictError:
        logging.info(f"Transcript for video {video_id} was stored concurrently, reusing it")
        existing = find_by_video_id(db, video_id)
        if existing is None:
            raise
        return existing, False


def attach_summary(db: Session, video_id: str, summary_text: str) -> TranscriptRecord:
    """Set the cached summary of an existing transcript."""
    record = find_by_video_id(db, video_id)
    if record is None:
        raise NotFound(f"Transcript for video {video_id} not found")

    record.summary = summary_text
    db.commit()
    db.refresh(record)
    return record
