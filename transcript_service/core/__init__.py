"""
Core functionality for the transcript acquisition service.

This package contains modules for resolving video references, scraping
captions, downloading and transcribing audio, normalizing segments,
and generating summaries and notes.
"""
