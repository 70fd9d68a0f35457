"""Size-capped, daily-rotated ``latest.log`` file handler.

Layout on disk:
- ``<log_dir>/latest.log`` receives every record
- On the first write of a new day, ``latest.log`` is renamed to
  ``YYYY-M-D.log`` (the day it covered) and a fresh file is started
- When a write would push ``latest.log`` past ``max_bytes``, the oldest
  DEBUG record is dropped first; without DEBUG records, the oldest record.
  A record is its header line plus any continuation lines (tracebacks)
"""

import logging
import re
from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path

FILE_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
FILE_DATE_FORMAT = "%H:%M:%S"
RECORD_START = re.compile(r"^\[\d{2}:\d{2}:\d{2}\] \[(\w+)\] ")


def split_records(text: str) -> list[str]:
    """Group the lines of a log file into records, keeping line endings."""
    records: list[str] = []
    for line in text.splitlines(keepends=True):
        if records and not RECORD_START.match(line):
            records[-1] += line
        else:
            records.append(line)
    return records


def _is_debug(record: str) -> bool:
    match = RECORD_START.match(record)
    return match is not None and match.group(1) == "DEBUG"


class LatestLogHandler(logging.Handler):
    """Write log lines to ``latest.log`` with daily rotation and a size cap."""

    def __init__(
        self,
        log_dir: str | Path = "./logs",
        max_bytes: int = 50 * 1024 * 1024,
        encoding: str = "utf-8",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the handler, creating the log directory if needed.

        Args:
            log_dir: Directory holding latest.log and rotated files
            max_bytes: Upper bound for the size of latest.log
            encoding: File encoding
            clock: Source of the current time
        """
        super().__init__()
        self.log_dir = Path(log_dir)
        self.max_bytes = max_bytes
        self.encoding = encoding
        self._clock = clock
        self.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._size = self.path.stat().st_size if self.path.exists() else 0
        self._day: date = self._clock().date()

    @property
    def path(self) -> Path:
        return self.log_dir / "latest.log"

    def _rotate_if_new_day(self, today: date) -> None:
        if today == self._day:
            return
        if self.path.exists():
            d = self._day
            self.path.rename(self.log_dir / f"{d.year}-{d.month}-{d.day}.log")
        self.path.write_text("", encoding=self.encoding)
        self._size = 0
        self._day = today

    def _trim_to_fit(self, incoming: int) -> None:
        """Drop old records until ``incoming`` more bytes fit under max_bytes."""
        if self._size + incoming <= self.max_bytes or not self.path.exists():
            return

        records = split_records(self.path.read_text(encoding=self.encoding))
        size = sum(len(r.encode(self.encoding)) for r in records)
        while records and size + incoming > self.max_bytes:
            index = next((i for i, r in enumerate(records) if _is_debug(r)), 0)
            size -= len(records.pop(index).encode(self.encoding))

        self.path.write_text("".join(records), encoding=self.encoding)
        self._size = size

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record) + "\n"
            incoming = len(line.encode(self.encoding))
            self._rotate_if_new_day(self._clock().date())
            self._trim_to_fit(incoming)
            with self.path.open("a", encoding=self.encoding) as f:
                f.write(line)
            self._size += incoming
        except Exception:
            self.handleError(record)
