"""Tests for the latest.log file handler."""

import logging
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

import pytest

from remote_session.utils.logfile import LatestLogHandler, split_records


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 9, 23, 59))


@pytest.fixture
def file_logger(tmp_path: Path, clock: FakeClock) -> Iterator[tuple[logging.Logger, LatestLogHandler]]:
    handler = LatestLogHandler(tmp_path / "logs", max_bytes=10_000, clock=clock)
    log = logging.getLogger("test_logfile")
    log.setLevel(logging.DEBUG)
    log.propagate = False
    log.addHandler(handler)
    yield log, handler
    log.removeHandler(handler)


def test_creates_directory_and_writes_lines(file_logger, tmp_path: Path) -> None:
    log, handler = file_logger

    log.info("SSH connection (h:22) established.")

    text = handler.path.read_text()
    assert (tmp_path / "logs").is_dir()
    assert "[INFO] SSH connection (h:22) established." in text
    assert text.startswith("[")


def test_rotates_on_new_day(file_logger, clock: FakeClock) -> None:
    log, handler = file_logger
    log.warning("yesterday")

    clock.now = datetime(2024, 3, 10, 0, 1)
    log.warning("today")

    rotated = handler.log_dir / "2024-3-9.log"
    assert rotated.exists()
    assert "yesterday" in rotated.read_text()
    assert "yesterday" not in handler.path.read_text()
    assert "today" in handler.path.read_text()


def test_drops_debug_lines_first(tmp_path: Path, clock: FakeClock) -> None:
    handler = LatestLogHandler(tmp_path, max_bytes=80, clock=clock)
    log = logging.getLogger("test_logfile_debug_first")
    log.setLevel(logging.DEBUG)
    log.propagate = False
    log.addHandler(handler)
    try:
        log.error("keep-error")
        log.debug("drop-debug")
        log.error("new-error")
    finally:
        log.removeHandler(handler)

    text = handler.path.read_text()
    assert "drop-debug" not in text
    assert "keep-error" in text
    assert "new-error" in text
    assert handler.path.stat().st_size <= 80


def test_drops_oldest_line_without_debug(tmp_path: Path, clock: FakeClock) -> None:
    handler = LatestLogHandler(tmp_path, max_bytes=70, clock=clock)
    log = logging.getLogger("test_logfile_oldest")
    log.setLevel(logging.INFO)
    log.propagate = False
    log.addHandler(handler)
    try:
        log.info("first")
        log.info("second")
        log.info("third")
    finally:
        log.removeHandler(handler)

    text = handler.path.read_text()
    assert "first" not in text
    assert "third" in text
    assert handler.path.stat().st_size <= 70


def test_resumes_size_of_existing_file(tmp_path: Path, clock: FakeClock) -> None:
    (tmp_path / "latest.log").write_text("x" * 42)

    handler = LatestLogHandler(tmp_path, clock=clock)

    assert handler._size == 42


def test_split_records_keeps_continuation_lines() -> None:
    text = (
        "[10:00:00] [DEBUG] failed\n"
        "Traceback (most recent call last):\n"
        "  File \"x.py\", line 1\n"
        "[10:00:01] [INFO] next\n"
    )

    records = split_records(text)

    assert len(records) == 2
    assert records[0].startswith("[10:00:00] [DEBUG]")
    assert records[0].endswith("line 1\n")
    assert records[1] == "[10:00:01] [INFO] next\n"


def test_trimming_drops_whole_multiline_record(tmp_path: Path, clock: FakeClock) -> None:
    existing = (
        "[10:00:00] [DEBUG] handshake failed\n"
        "Traceback (most recent call last):\n"
        "  File \"session.py\", line 9, in test\n"
        "OSError: refused\n"
        "[10:00:01] [ERROR] keep-me\n"
    )
    (tmp_path / "latest.log").write_text(existing)
    handler = LatestLogHandler(tmp_path, max_bytes=len(existing) + 5, clock=clock)
    log = logging.getLogger("test_logfile_multiline")
    log.setLevel(logging.INFO)
    log.propagate = False
    log.addHandler(handler)
    try:
        log.error("incoming")
    finally:
        log.removeHandler(handler)

    text = handler.path.read_text()
    assert "Traceback" not in text
    assert "OSError" not in text
    assert "keep-me" in text
    assert "incoming" in text
