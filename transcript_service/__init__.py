"""
YouTube Transcript Acquisition Service.

This service resolves YouTube video references, acquires a time-aligned
transcript (cache, captions, or speech-to-text on downloaded audio), and
generates summaries and study notes using LLM models.
"""

from transcript_service.config import config

__version__ = config.APP_VERSION
