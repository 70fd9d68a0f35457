"""Colorful console logging formatter."""

import logging
import re
from datetime import datetime

RESET = "\033[0m"
DIM = "\033[2m"

LEVEL_COLORS = {
    "DEBUG": "\033[34m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}

COMPONENT_COLORS = {
    "remote_session.services": "\033[95m",
    "remote_session.config": "\033[94m",
    "remote_session.__main__": "\033[36m",
}

ADDRESS_COLOR = "\033[95m"
DURATION_COLOR = "\033[93m"

ADDRESS_PATTERN = re.compile(r"(\(?[\w\.\-]+:\d+\)?)")
DURATION_PATTERN = re.compile(r"(\d+\.?\d*m?s)\b")

PACKAGE_PREFIX = "remote_session."


class ColorfulFormatter(logging.Formatter):
    """Render ``time | level | component | message [file:line]`` lines.

    Colors are optional; without them the layout is identical, which keeps
    redirected output greppable.
    """

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to emit ANSI color codes.
        """
        super().__init__()
        self.use_colors = use_colors

    def _paint(self, text: str, color: str | None) -> str:
        if not self.use_colors or not color:
            return text
        return f"{color}{text}{RESET}"

    def _component(self, name: str) -> str:
        color = next(
            (c for prefix, c in COMPONENT_COLORS.items() if name.startswith(prefix)),
            None,
        )
        short = name[len(PACKAGE_PREFIX):] if name.startswith(PACKAGE_PREFIX) else name
        return self._paint(f"{short:<20}", color)

    def _highlight(self, message: str) -> str:
        """Highlight host:port addresses and durations."""
        if not self.use_colors:
            return message
        message = ADDRESS_PATTERN.sub(f"{ADDRESS_COLOR}\\1{RESET}", message)
        return DURATION_PATTERN.sub(f"{DURATION_COLOR}\\1{RESET}", message)

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created)
        timestamp = f"{created:%H:%M:%S}.{int(record.msecs):03d} {created:%m/%d}"
        sep = self._paint("|", DIM)

        parts = [
            self._paint(timestamp, DIM),
            sep,
            self._paint(f"{record.levelname:<8}", LEVEL_COLORS.get(record.levelname)),
            sep,
            self._component(record.name),
            sep,
            self._highlight(record.getMessage()),
            self._paint(f"[{record.filename}:{record.lineno}]", DIM),
        ]
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line
