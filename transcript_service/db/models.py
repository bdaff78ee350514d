"""
SQLAlchemy models for the transcript service database.
"""

import datetime
from sqlalchemy import Column, String, Text, DateTime, Integer, JSON

from transcript_service.db.database import Base


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class TranscriptRecord(Base):
    """One normalized transcript per YouTube video."""
    __tablename__ = "transcripts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    video_id = Column(String(20), nullable=False, unique=True, index=True)
    full_text = Column(Text, nullable=False)
    segments = Column(JSON, nullable=False)  # [{text, offset_ms, duration_ms}] ordered by offset
    summary = Column(Text, nullable=True)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<TranscriptRecord(id={self.id}, video_id='{self.video_id}')>"
