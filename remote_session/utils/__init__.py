"""Utilities for remote sessions."""

from remote_session.utils.console import ColorfulFormatter
from remote_session.utils.logfile import LatestLogHandler
from remote_session.utils.logsetup import configure_logging
from remote_session.utils.shell import build_command, escape_shell_arg

__all__ = [
    "build_command",
    "ColorfulFormatter",
    "configure_logging",
    "escape_shell_arg",
    "LatestLogHandler",
]
