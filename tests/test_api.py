"""
Tests for the HTTP API.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from conftest import FakeScraper, FakeSummarizer, FakeTranscriber
from transcript_service.api.app import app
from transcript_service.api.routes import get_pipeline
from transcript_service.utils.error_handling import ConfigurationError, TranscriptionFailed


@pytest.fixture
def client_for(make_pipeline):
    """Return a factory creating a TestClient around a fake-backed pipeline."""

    def factory(**overrides):
        pipeline = make_pipeline(**overrides)
        app.dependency_overrides[get_pipeline] = lambda: pipeline
        return TestClient(app)

    yield factory
    app.dependency_overrides.clear()


def test_root(client_for):
    response = client_for().get("/")
    assert response.status_code == 200
    assert response.json()["name"] == "YouTube Transcript Service"


def test_acquire_transcript(client_for, caption_snippets):
    client = client_for(scraper=FakeScraper(caption_snippets))

    response = client.post("/api/v1/transcripts/youtube", json={"url": "https://youtu.be/abcdefghijk"})

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "scrape"
    assert body["videoId"] == "abcdefghijk"
    assert body["fullText"] == "Welcome to the lecture. Today we cover recursion."
    assert body["segments"][1] == {"text": "Today we cover recursion.", "offsetMs": 2500, "durationMs": 3000}

    again = client.post("/api/v1/transcripts/youtube", json={"url": "abcdefghijk"})
    assert again.json()["source"] == "cache"


def test_acquire_transcript_invalid_reference(client_for):
    response = client_for().post("/api/v1/transcripts/youtube", json={"url": "not-a-url"})
    assert response.status_code == 400


def test_acquire_transcript_failure(client_for):
    client = client_for(transcriber=FakeTranscriber(error=TranscriptionFailed("provider down")))

    response = client.post("/api/v1/transcripts/youtube", json={"url": "abcdefghijk"})

    assert response.status_code == 502
    assert "provider down" in response.json()["detail"]


def test_acquire_transcript_failure_logged_once(client_for, caplog):
    client = client_for(transcriber=FakeTranscriber(error=TranscriptionFailed("provider down")))

    with caplog.at_level(logging.DEBUG):
        response = client.post("/api/v1/transcripts/youtube", json={"url": "abcdefghijk"})

    assert response.status_code == 502
    errors = [record for record in caplog.records if record.levelno >= logging.ERROR]
    assert len(errors) == 1
    assert "AcquisitionFailed" in errors[0].getMessage()
    assert "provider down" in errors[0].getMessage()
    assert "/api/v1/transcripts/youtube" in errors[0].getMessage()


def test_configuration_error_is_reported(client_for):
    class UnconfiguredTranscriber(FakeTranscriber):
        def ensure_ready(self):
            raise ConfigurationError("Speech-recognition API key is not configured.")

    client = client_for(transcriber=UnconfiguredTranscriber())
    response = client.post("/api/v1/transcripts/youtube", json={"url": "abcdefghijk"})

    assert response.status_code == 500
    assert "not configured" in response.json()["detail"]


def test_get_transcript(client_for, caption_snippets):
    client = client_for(scraper=FakeScraper(caption_snippets))
    client.post("/api/v1/transcripts/youtube", json={"url": "abcdefghijk"})

    response = client.get("/api/v1/transcripts/abcdefghijk")

    assert response.status_code == 200
    body = response.json()
    assert body["videoId"] == "abcdefghijk"
    assert body["summary"] is None
    assert "createdAt" in body

    by_id = client.get(f"/api/v1/transcripts/{body['id']}")
    assert by_id.json()["videoId"] == "abcdefghijk"


def test_get_transcript_not_found(client_for):
    response = client_for().get("/api/v1/transcripts/abcdefghijk")
    assert response.status_code == 404


def test_generate_summary(client_for, caption_snippets):
    summarizer = FakeSummarizer(summary="Core concept.")
    client = client_for(scraper=FakeScraper(caption_snippets), summarizer=summarizer)
    client.post("/api/v1/transcripts/youtube", json={"url": "abcdefghijk"})

    first = client.post("/api/v1/transcripts/abcdefghijk/summary")
    second = client.post("/api/v1/transcripts/abcdefghijk/summary")

    assert first.json() == {"source": "generated", "summary": "Core concept."}
    assert second.json() == {"source": "cache", "summary": "Core concept."}
    assert summarizer.summary_calls == 1


def test_generate_notes(client_for, caption_snippets):
    client = client_for(scraper=FakeScraper(caption_snippets), summarizer=FakeSummarizer(notes="# Recursion"))

    response = client.post("/api/v1/notes", json={"url": "https://youtu.be/abcdefghijk"})

    assert response.status_code == 200
    assert response.json() == {"notes": "# Recursion"}
