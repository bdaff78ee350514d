"""
Centralized error types for the transcript acquisition service.

Every failure the pipeline surfaces derives from ``TranscriptServiceError``
so the API layer can translate it into a single status code.
"""

import json
import traceback
from typing import Any, Dict, Optional

from transcript_service.utils.logger import logging


class TranscriptServiceError(Exception):
    """Base class for all service errors."""

    status_code = 500


class InvalidReference(TranscriptServiceError):
    """The input could not be resolved to a video identifier."""

    status_code = 400


class NotFound(TranscriptServiceError):
    """No transcript record matches the lookup."""

    status_code = 404


class ConflictError(TranscriptServiceError):
    """A transcript record for the video already exists."""

    status_code = 409


class ConfigurationError(TranscriptServiceError):
    """A required credential or setting is missing. Not retried."""

    status_code = 500


class CaptionsUnavailable(TranscriptServiceError):
    """Public captions could not be fetched for the video."""

    status_code = 502


class DownloadFailed(TranscriptServiceError):
    """The audio download did not produce an output file."""

    status_code = 502


class TranscriptionFailed(TranscriptServiceError):
    """The speech-recognition provider returned an error."""

    status_code = 502


class SummaryFailed(TranscriptServiceError):
    """The LLM returned no usable text."""

    status_code = 502


class AcquisitionFailed(TranscriptServiceError):
    """All acquisition tiers were exhausted."""

    status_code = 502

    def __init__(self, video_id: str, cause: Optional[BaseException] = None):
        self.video_id = video_id
        self.cause = cause
        message = f"Could not acquire transcript for video {video_id}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


def log_pipeline_failure(error: Exception, context: Dict[str, Any]) -> None:
    """
    Log a terminal pipeline failure with its diagnostic context.

    Args:
        error: The exception that ended the request
        context: Extra fields describing the request (video id, stage, ...)
    """
    try:
        diagnostic = json.dumps(context, default=str)
    except (TypeError, ValueError) as e:
        diagnostic = f"<unserializable: {e}>"
    logging.error(f"Pipeline failure ({type(error).__name__}): {error} | {diagnostic}")
    logging.debug("".join(traceback.format_exception(type(error), error, error.__traceback__)))
