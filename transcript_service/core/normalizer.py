"""
Convert caption lists and speech-recognition results into canonical segments.

Two recognition shapes are understood: paragraph groupings (preferred) and a
flat word timeline. Anything malformed maps to an empty list, since an empty
transcript is a safer failure than an error halfway through a request.
"""

import re
from typing import Any, Dict, Iterable, List

from transcript_service.models.schemas import Segment
from transcript_service.utils.logger import logging

MAX_BUCKET_SECONDS = 10.0
SENTENCE_END = re.compile(r"[.!?]$")


def _ms(seconds: float) -> int:
    return max(0, int(round(float(seconds) * 1000)))


def _ordered(segments: List[Segment]) -> List[Segment]:
    return sorted(segments, key=lambda segment: segment.offset_ms)


def join_segments(segments: Iterable[Segment]) -> str:
    """Full transcript text: segment texts joined by single spaces, in order."""
    return " ".join(segment.text for segment in segments)


def normalize_captions(snippets: List[Dict[str, Any]]) -> List[Segment]:
    """
    Normalize scraped caption snippets.

    Args:
        snippets: Entries with "text", "start" and "duration" in seconds

    Returns:
        Segments in non-decreasing offset order
    """
    segments = []
    for snippet in snippets:
        text = " ".join(str(snippet.get("text", "")).split())
        if not text:
            continue
        segments.append(Segment(
            text=text,
            offset_ms=_ms(snippet.get("start") or 0),
            duration_ms=_ms(snippet.get("duration") or 0),
        ))
    return _ordered(segments)


def _from_paragraphs(paragraphs: List[Dict[str, Any]]) -> List[Segment]:
    segments = []
    for paragraph in paragraphs:
        sentences = paragraph.get("sentences") or []
        text = " ".join(str(sentence.get("text", "")) for sentence in sentences).strip()
        if not text:
            continue
        start = float(paragraph["start"])
        end = float(paragraph["end"])
        segments.append(Segment(text=text, offset_ms=_ms(start), duration_ms=_ms(end - start)))
    return segments


def _from_words(words: List[Dict[str, Any]]) -> List[Segment]:
    segments: List[Segment] = []
    bucket: List[str] = []
    bucket_start = 0.0
    bucket_end = 0.0

    def close():
        segments.append(Segment(
            text=" ".join(bucket),
            offset_ms=_ms(bucket_start),
            duration_ms=_ms(bucket_end - bucket_start),
        ))
        bucket.clear()

    for word in words:
        start = float(word.get("start") or 0)
        end = float(word.get("end") or start)

        # Close before the word that would stretch the bucket past the cap.
        if bucket and end - bucket_start > MAX_BUCKET_SECONDS:
            close()
        if not bucket:
            bucket_start = start

        punctuated = word.get("punctuated_word") or ""
        bucket.append(punctuated or str(word.get("word", "")))
        bucket_end = end

        if SENTENCE_END.search(punctuated):
            close()

    if bucket:
        close()

    return segments


def normalize_recognition_result(result: Dict[str, Any]) -> List[Segment]:
    """
    Map a speech-recognition result to segments.

    Args:
        result: Recognition result, optionally wrapped in {"result": ...}

    Returns:
        Segments in non-decreasing offset order, or [] when the result is unusable
    """
    try:
        payload = result.get("result") or result
        channels = (payload.get("results") or {}).get("channels") or []
        if not channels:
            return []

        alternatives = channels[0].get("alternatives") or []
        if not alternatives:
            return []
        alternative = alternatives[0]

        paragraphs = (alternative.get("paragraphs") or {}).get("paragraphs")
        if isinstance(paragraphs, list):
            return _ordered(_from_paragraphs(paragraphs))

        words = alternative.get("words")
        if isinstance(words, list):
            return _ordered(_from_words(words))

        return []
    except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
        logging.warning(f"Could not map recognition result to segments: {e}")
        return []
