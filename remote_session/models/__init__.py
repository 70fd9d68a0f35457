"""Data models for remote sessions."""

from remote_session.models.command import ExecutionResult, OutputChunk, StreamSource
from remote_session.models.session import ConnectResult, Credentials

__all__ = [
    "ConnectResult",
    "Credentials",
    "ExecutionResult",
    "OutputChunk",
    "StreamSource",
]
