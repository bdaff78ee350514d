"""
Configuration settings for the transcript acquisition service.
"""

import os
from typing import List, Optional
from pathlib import Path
from dotenv import load_dotenv

from transcript_service.utils.error_handling import ConfigurationError
from transcript_service.utils.helpers import resolve_ffmpeg_location


# Ensure environment variables are loaded
load_dotenv()


class Config:
    """Base configuration class."""

    # Application info
    APP_NAME = "YouTube Transcript Service"
    APP_VERSION = "0.2.0"

    # Data directories
    BASE_DIR = Path(__file__).resolve().parent.parent.absolute()
    DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))
    TEMP_DIR = Path(os.getenv("TRANSCRIPT_TEMP_DIR", BASE_DIR / "temp"))

    DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/transcripts.db")

    # Default models
    DEFAULT_TRANSCRIPTION_MODEL = os.getenv("TRANSCRIPTION_MODEL", "whisper-large-v3-turbo")
    DEFAULT_SUMMARY_MODEL = os.getenv("SUMMARY_MODEL", "llama-3.3-70b-versatile")

    # External tools
    YT_DLP_BINARY = os.getenv("YT_DLP_BINARY")
    FFMPEG_LOCATION = resolve_ffmpeg_location(os.getenv("FFMPEG_PATH"))
    CAPTION_LANGUAGES: List[str] = [
        lang.strip() for lang in os.getenv("CAPTION_LANGUAGES", "en").split(",") if lang.strip()
    ]

    # Per-call ceilings in seconds
    SCRAPE_TIMEOUT = float(os.getenv("SCRAPE_TIMEOUT", "30"))
    DOWNLOAD_TIMEOUT = float(os.getenv("DOWNLOAD_TIMEOUT", "600"))
    TRANSCRIPTION_TIMEOUT = float(os.getenv("TRANSCRIPTION_TIMEOUT", "600"))
    LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "120"))

    # API server
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "8000"))

    @classmethod
    def initialize(cls):
        """Initialize the application configuration."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def speech_api_key(cls) -> Optional[str]:
        """Key for the speech-recognition provider, read at call time."""
        return os.getenv("SPEECH_API_KEY") or os.getenv("GROQ_API_KEY")

    @classmethod
    def llm_api_key(cls) -> Optional[str]:
        """Key for the LLM provider, read at call time."""
        return os.getenv("LLM_API_KEY") or os.getenv("GROQ_API_KEY")

    @classmethod
    def require_speech_api_key(cls) -> str:
        key = cls.speech_api_key()
        if not key:
            raise ConfigurationError(
                "Speech-recognition API key is not configured. "
                "Set SPEECH_API_KEY or GROQ_API_KEY in the .env file or environment."
            )
        return key

    @classmethod
    def require_llm_api_key(cls) -> str:
        key = cls.llm_api_key()
        if not key:
            raise ConfigurationError(
                "LLM API key is not configured. "
                "Set LLM_API_KEY or GROQ_API_KEY in the .env file or environment."
            )
        return key


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    LOG_LEVEL = "INFO"


# Determine which configuration to use based on environment
def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env == "production":
        return ProductionConfig
    else:
        return DevelopmentConfig


# Create a config instance
config = get_config()
config.initialize()
