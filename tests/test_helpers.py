"""
Tests for helper utilities.
"""

import threading
import time

from transcript_service.utils.helpers import resolve_ffmpeg_location, truncate_text
from transcript_service.utils.locking import KeyedLock


def test_resolve_ffmpeg_location_missing():
    assert resolve_ffmpeg_location(None) is None
    assert resolve_ffmpeg_location("") is None
    assert resolve_ffmpeg_location("/does/not/exist/ffmpeg") is None


def test_resolve_ffmpeg_location_strips_quotes_and_semicolons(tmp_path):
    binary = tmp_path / "ffmpeg"
    binary.write_text("")

    assert resolve_ffmpeg_location(f'"{binary}";') == str(binary)
    assert resolve_ffmpeg_location(f"'{binary}'") == str(binary)
    assert resolve_ffmpeg_location(f' "{binary}";; ') == str(binary)


def test_resolve_ffmpeg_location_quoted_directory_with_semicolon(tmp_path):
    binary = tmp_path / "ffmpeg"
    binary.write_text("")

    assert resolve_ffmpeg_location(f'"{tmp_path}";') == str(binary)


def test_resolve_ffmpeg_location_directory(tmp_path):
    assert resolve_ffmpeg_location(str(tmp_path)) == str(tmp_path)

    binary = tmp_path / "ffmpeg"
    binary.write_text("")
    assert resolve_ffmpeg_location(str(tmp_path)) == str(binary)


def test_truncate_text():
    assert truncate_text("short") == "short"
    assert truncate_text("x" * 20, max_length=10) == "xxxxxxx..."


def test_keyed_lock_serializes_same_key():
    locks = KeyedLock()
    active = []
    overlaps = []

    def worker():
        with locks.hold("abcdefghijk"):
            if active:
                overlaps.append(True)
            active.append(1)
            time.sleep(0.05)
            active.pop()

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert overlaps == []
    assert len(locks) == 0


def test_keyed_lock_distinct_keys_do_not_block():
    locks = KeyedLock()

    with locks.hold("a"):
        acquired = threading.Event()

        def other():
            with locks.hold("b"):
                acquired.set()

        thread = threading.Thread(target=other)
        thread.start()
        assert acquired.wait(timeout=1)
        thread.join()
