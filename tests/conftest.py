"""
Configuration for pytest tests.
"""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path

# Point every writable location at a scratch directory before the package is imported
_TEST_ROOT = Path(tempfile.mkdtemp(prefix="transcript_service_tests_"))
os.environ.setdefault("DATA_DIR", str(_TEST_ROOT / "data"))
os.environ.setdefault("TRANSCRIPT_TEMP_DIR", str(_TEST_ROOT / "temp"))
os.environ.setdefault("LOG_DIR", str(_TEST_ROOT / "logs"))
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TEST_ROOT}/test.db")
os.environ["ENVIRONMENT"] = "development"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from transcript_service.db.database import Base
from transcript_service.db import models  # noqa: F401
from transcript_service.core.pipeline import TranscriptPipeline
from transcript_service.utils.error_handling import CaptionsUnavailable, DownloadFailed
from transcript_service.utils.locking import KeyedLock


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Remove the scratch directory once the session ends."""
    yield

    import shutil
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)


@pytest.fixture
def session_factory(tmp_path):
    """Return a session factory bound to a fresh SQLite database."""
    engine = create_engine(
        f"sqlite:///{tmp_path}/transcripts.db",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    """Return a database session for one test."""
    db = session_factory()
    yield db
    db.close()


class FakeScraper:
    """Caption scraper returning canned snippets, or failing when given none."""

    def __init__(self, snippets=None):
        self.snippets = snippets
        self.calls = 0

    def fetch(self, video_id):
        self.calls += 1
        if not self.snippets:
            raise CaptionsUnavailable(f"No captions for {video_id}")
        return self.snippets


class FakeAudioFetcher:
    """Audio fetcher writing a small file and removing it when the block exits."""

    def __init__(self, directory, fail=False):
        self.directory = Path(directory)
        self.fail = fail
        self.calls = 0
        self.paths = []

    @contextmanager
    def fetch(self, video_id):
        self.calls += 1
        path = self.directory / f"{video_id}.m4a"
        self.paths.append(path)
        try:
            if self.fail:
                raise DownloadFailed("Download failed")
            path.write_bytes(b"audio")
            yield path
        finally:
            if path.exists():
                path.unlink()


class FakeTranscriber:
    """Speech transcriber returning a canned recognition result."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = 0

    def ensure_ready(self):
        pass

    def transcribe(self, stream, filename):
        self.calls += 1
        stream.read()
        if self.error is not None:
            raise self.error
        return self.result


class FakeSummarizer:
    """Summarizer counting how often the LLM would have been called."""

    def __init__(self, summary="Core concept.", notes="# Notes"):
        self.summary = summary
        self.notes = notes
        self.summary_calls = 0
        self.notes_calls = 0

    def summarize(self, transcript_text):
        self.summary_calls += 1
        return self.summary

    def generate_notes(self, transcript_text):
        self.notes_calls += 1
        return self.notes


@pytest.fixture
def caption_snippets():
    """Caption snippets as returned by the caption API, in seconds."""
    return [
        {"text": "Welcome to the lecture.", "start": 0.0, "duration": 2.5},
        {"text": "Today we cover\nrecursion.", "start": 2.5, "duration": 3.0},
    ]


@pytest.fixture
def paragraph_result():
    """Recognition result with paragraph groupings."""
    return {
        "results": {
            "channels": [{
                "alternatives": [{
                    "paragraphs": {
                        "paragraphs": [
                            {"start": 0, "end": 5, "sentences": [{"text": "Hello"}, {"text": "world"}]},
                            {"start": 5, "end": 9, "sentences": [{"text": "Bye"}]},
                        ]
                    }
                }]
            }]
        }
    }


@pytest.fixture
def make_pipeline(db_session, tmp_path):
    """Build a pipeline from fake providers; keyword arguments replace defaults."""

    def factory(**overrides):
        components = {
            "db": db_session,
            "scraper": FakeScraper(),
            "audio_fetcher": FakeAudioFetcher(tmp_path),
            "transcriber": FakeTranscriber(),
            "summarizer": FakeSummarizer(),
            "locks": KeyedLock(),
        }
        components.update(overrides)
        return TranscriptPipeline(**components)

    return factory
