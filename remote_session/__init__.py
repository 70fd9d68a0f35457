"""Minimal asynchronous SSH remote shell session client."""

from remote_session.exceptions import (
    ConfigurationError,
    HandshakeError,
    SessionError,
    SessionTimeoutError,
    TransportError,
)
from remote_session.models import ConnectResult, Credentials, ExecutionResult
from remote_session.services import RemoteSession
from remote_session.utils import escape_shell_arg

__all__ = [
    "ConfigurationError",
    "ConnectResult",
    "Credentials",
    "escape_shell_arg",
    "ExecutionResult",
    "HandshakeError",
    "RemoteSession",
    "SessionError",
    "SessionTimeoutError",
    "TransportError",
]
