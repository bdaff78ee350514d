"""
Resolve arbitrary YouTube references to the canonical video identifier.
"""

import re
from typing import Optional

VIDEO_ID_PATTERN = r"[A-Za-z0-9_-]{11}"

_BARE_ID = re.compile(rf"^{VIDEO_ID_PATTERN}$")
_URL_ID = re.compile(
    rf"(?:[?&]v=|youtu\.be/|/embed/|/shorts/|/live/|/v/)({VIDEO_ID_PATTERN})(?=[&?/#]|$)"
)


def resolve_video_id(value) -> Optional[str]:
    """
    Extract the 11-character video ID from a URL, share link, or bare ID.

    Args:
        value: Watch URL, youtu.be link, embed/shorts link, or the ID itself

    Returns:
        The video ID, or None when the input cannot be resolved
    """
    if not isinstance(value, str):
        return None

    candidate = value.strip()
    if not candidate:
        return None

    if _BARE_ID.match(candidate):
        return candidate

    match = _URL_ID.search(candidate)
    if match:
        return match.group(1)

    return None


def watch_url(video_id: str) -> str:
    """Canonical watch URL for a video ID."""
    return f"https://www.youtube.com/watch?v={video_id}"
