"""
Helper utility functions for the transcript acquisition service.
"""

import os
import sys
from typing import Optional


def ensure_dir(directory: str) -> None:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        directory: Directory path to ensure exists
    """
    os.makedirs(directory, exist_ok=True)


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix


def resolve_ffmpeg_location(raw: Optional[str]) -> Optional[str]:
    """
    Sanitize an ffmpeg location taken from the environment.

    Wrapping quotes and trailing semicolons are stripped. A directory is
    resolved to the ffmpeg binary inside it when present, otherwise the
    directory itself is returned since yt-dlp accepts either.

    Args:
        raw: Value of FFMPEG_PATH, possibly None

    Returns:
        Usable path, or None when nothing exists at the location
    """
    if not raw:
        return None

    path = str(raw).strip().rstrip(";").strip()
    if len(path) >= 2 and path[0] == path[-1] and path[0] in ("'", '"'):
        path = path[1:-1]
    path = path.strip().rstrip(";").strip()
    if not path:
        return None

    if os.path.isdir(path):
        binary = "ffmpeg.exe" if sys.platform == "win32" else "ffmpeg"
        candidate = os.path.join(path, binary)
        if os.path.exists(candidate):
            return candidate
        return path

    if os.path.exists(path):
        return path
    return None
