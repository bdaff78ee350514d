"""
Module for transcribing downloaded audio using Groq's speech-recognition API.
"""

from typing import Any, BinaryIO, Dict, List, Optional

from groq import Groq

from transcript_service.config import config
from transcript_service.models.schemas import TranscriptionConfig
from transcript_service.utils.error_handling import TranscriptionFailed
from transcript_service.utils.logger import logging


def _as_dict(response: Any) -> Dict[str, Any]:
    if isinstance(response, dict):
        return response
    if hasattr(response, "model_dump"):
        return response.model_dump()
    return dict(response)


class SpeechTranscriber:
    """Class to handle speech-recognition requests."""

    def __init__(self, transcribe_config: Optional[TranscriptionConfig] = None,
                 api_key: Optional[str] = None):
        """
        Initialize the transcriber.

        Args:
            transcribe_config: Model and request options
            api_key: Groq API key (if None, resolved from the environment at first use)
        """
        self.transcribe_config = transcribe_config or TranscriptionConfig()
        self.api_key = api_key
        self._client = None

    def ensure_ready(self) -> None:
        """Fail fast with ConfigurationError when no key is configured."""
        if not self.api_key:
            self.api_key = config.require_speech_api_key()

    @property
    def client(self) -> Groq:
        if self._client is None:
            self.ensure_ready()
            self._client = Groq(api_key=self.api_key, timeout=self.transcribe_config.timeout)
        return self._client

    def transcribe(self, stream: BinaryIO, filename: str) -> Dict[str, Any]:
        """
        Transcribe an open audio stream.

        Args:
            stream: Readable binary stream over the audio file
            filename: Name sent along with the upload

        Returns:
            Recognition result with channels and alternatives

        Raises:
            TranscriptionFailed: if the provider returns an error
        """
        client = self.client
        logging.info(f"Transcribing audio file: {filename}")

        options = {
            "model": self.transcribe_config.model,
            "response_format": self.transcribe_config.response_format,
            "timestamp_granularities": self.transcribe_config.timestamp_granularities,
            "temperature": self.transcribe_config.temperature,
        }
        if self.transcribe_config.language:
            options["language"] = self.transcribe_config.language
        if self.transcribe_config.prompt:
            options["prompt"] = self.transcribe_config.prompt

        try:
            transcription = client.audio.transcriptions.create(file=(filename, stream), **options)
        except Exception as e:
            raise TranscriptionFailed(f"Speech recognition failed for {filename}: {e}") from e

        logging.info("Transcription complete.")
        return self.to_recognition_result(_as_dict(transcription))

    @staticmethod
    def to_recognition_result(payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Reshape a verbose_json transcription into a channel/alternative result.

        Whisper segments become paragraphs with a single sentence each and
        word timestamps become the word timeline.
        """
        words: List[Dict[str, Any]] = []
        for word in payload.get("words") or []:
            text = str(word.get("word", "")).strip()
            words.append({
                "word": text,
                "punctuated_word": text,
                "start": word.get("start"),
                "end": word.get("end"),
            })

        alternative: Dict[str, Any] = {
            "transcript": (payload.get("text") or "").strip(),
            "words": words,
        }

        segments = payload.get("segments") or []
        if segments:
            paragraphs = []
            for segment in segments:
                paragraphs.append({
                    "start": segment.get("start"),
                    "end": segment.get("end"),
                    "sentences": [{
                        "text": str(segment.get("text", "")).strip(),
                        "start": segment.get("start"),
                        "end": segment.get("end"),
                    }],
                })
            alternative["paragraphs"] = {"paragraphs": paragraphs}

        return {
            "metadata": {"model": payload.get("model"), "language": payload.get("language")},
            "results": {"channels": [{"alternatives": [alternative]}]},
        }
