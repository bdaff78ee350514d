"""
Tier-2 acquisition: download the smallest audio stream of a video.
"""

import os
import subprocess
import sys
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from transcript_service.core.video_reference import watch_url
from transcript_service.models.schemas import AudioDownloadConfig
from transcript_service.utils.error_handling import DownloadFailed
from transcript_service.utils.helpers import ensure_dir, truncate_text
from transcript_service.utils.logger import logging


class AudioFetcher:
    """Class to download audio-only streams with yt-dlp into scoped temp files."""

    def __init__(self, download_config: Optional[AudioDownloadConfig] = None):
        """
        Initialize the fetcher.

        Args:
            download_config: Download settings; the ffmpeg location is taken
                from here and never read from the environment directly
        """
        self.config = download_config or AudioDownloadConfig()

    def _temp_path(self, video_id: str) -> Path:
        ensure_dir(self.config.output_directory)
        name = f"{video_id}-{uuid.uuid4().hex}.{self.config.extension}"
        return Path(self.config.output_directory) / name

    def build_command(self, video_id: str, output_path: Path) -> List[str]:
        """Build the downloader command line for one video."""
        if self.config.binary:
            command = [self.config.binary]
        else:
            command = [sys.executable, "-m", "yt_dlp"]

        command += [
            "--format", self.config.audio_format,
            "--output", str(output_path),
            "--no-check-certificates",
            "--no-warnings",
            "--prefer-free-formats",
            "--no-playlist",
            "--no-progress",
        ]
        for header in self.config.headers:
            command += ["--add-header", header]
        if self.config.ffmpeg_location:
            command += ["--ffmpeg-location", self.config.ffmpeg_location]

        command.append(watch_url(video_id))
        return command

    def _download(self, video_id: str, output_path: Path) -> None:
        command = self.build_command(video_id, output_path)
        logging.info(f"Downloading audio for {video_id}")
        logging.debug(f"Downloader command: {' '.join(command)}")

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise DownloadFailed(
                f"Audio download for {video_id} timed out after {self.config.timeout}s"
            ) from e
        except OSError as e:
            raise DownloadFailed(f"Could not start audio downloader: {e}") from e

        if result.returncode != 0:
            stderr = truncate_text((result.stderr or "").strip(), 500)
            raise DownloadFailed(
                f"Audio downloader exited with code {result.returncode} for {video_id}: {stderr}"
            )

        if not output_path.exists():
            raise DownloadFailed(f"Download failed: no audio file produced for {video_id}")

    @staticmethod
    def cleanup(output_path: Path) -> None:
        """Remove the audio file and any partial download next to it."""
        for path in (output_path, output_path.with_name(output_path.name + ".part")):
            try:
                if path.exists():
                    os.remove(path)
                    logging.debug(f"Removed temporary audio file: {path}")
            except OSError as e:
                logging.warning(f"Could not remove temporary audio file {path}: {e}")

    @contextmanager
    def fetch(self, video_id: str) -> Iterator[Path]:
        """
        Download audio for a video and yield the local file path.

        The file only lives for the duration of the ``with`` block and is
        removed on every exit path, including exceptions raised by the caller.

        Raises:
            DownloadFailed: if the downloader fails or produces no file
        """
        output_path = self._temp_path(video_id)
        try:
            self._download(video_id, output_path)
            logging.info(f"Audio saved to: {output_path}")
            yield output_path
        finally:
            self.cleanup(output_path)
