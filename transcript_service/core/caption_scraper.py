"""
Tier-1 acquisition: fetch publicly available caption tracks.
"""

from typing import Any, Dict, List, Optional

import requests
from youtube_transcript_api import YouTubeTranscriptApi

from transcript_service.config import config
from transcript_service.utils.error_handling import CaptionsUnavailable
from transcript_service.utils.logger import logging


class TimeoutSession(requests.Session):
    """HTTP session applying a default timeout to every request it sends."""

    def __init__(self, timeout: float):
        super().__init__()
        self.timeout = timeout

    def request(self, method, url, **kwargs):
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().request(method, url, **kwargs)


class CaptionScraper:
    """Fetch caption snippets for a video without downloading any media."""

    def __init__(self, languages: Optional[List[str]] = None, timeout: float = config.SCRAPE_TIMEOUT):
        self.languages = languages or config.CAPTION_LANGUAGES or ["en"]
        self.timeout = timeout
        self.api = YouTubeTranscriptApi(http_client=TimeoutSession(timeout))

    def fetch(self, video_id: str) -> List[Dict[str, Any]]:
        """
        Fetch captions for a video.

        Args:
            video_id: Canonical YouTube video ID

        Returns:
            Ordered list of {"text", "start", "duration"} entries in seconds

        Raises:
            CaptionsUnavailable: if no captions could be retrieved in time
        """
        try:
            snippets = self.api.fetch(video_id, languages=self.languages).to_raw_data()
        except requests.Timeout as e:
            raise CaptionsUnavailable(
                f"Caption request for {video_id} timed out after {self.timeout}s"
            ) from e
        except Exception as e:
            raise CaptionsUnavailable(f"Captions unavailable for {video_id}: {e}") from e

        if not snippets:
            raise CaptionsUnavailable(f"Caption track for {video_id} is empty")

        logging.debug(f"Fetched {len(snippets)} caption snippets for {video_id}")
        return snippets
