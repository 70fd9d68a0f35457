"""Logging configuration for the remote_session package."""

import logging
import sys
from typing import TYPE_CHECKING

from remote_session.utils.console import ColorfulFormatter
from remote_session.utils.logfile import LatestLogHandler

if TYPE_CHECKING:
    from remote_session.config import Settings


def configure_logging(settings: "Settings") -> logging.Logger:
    """Attach console and file handlers to the ``remote_session`` logger.

    Safe to call more than once; handlers are only added the first time.

    Args:
        settings: Settings providing level, colors, log_dir and log_max_bytes

    Returns:
        The configured package logger
    """
    use_colors = settings.log_colors and sys.stderr.isatty()

    package_logger = logging.getLogger("remote_session")
    package_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    if not package_logger.handlers:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ColorfulFormatter(use_colors=use_colors))
        package_logger.addHandler(console)
        package_logger.addHandler(
            LatestLogHandler(settings.log_dir, max_bytes=settings.log_max_bytes)
        )
        package_logger.propagate = False

    # asyncssh logs every channel at INFO
    logging.getLogger("asyncssh").setLevel(logging.WARNING)

    return package_logger
