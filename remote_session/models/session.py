"""Session-related data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """Username/password pair used for the handshake."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class ConnectResult:
    """Outcome of a connect attempt.

    Truthy when the handshake succeeded. On failure ``error`` holds the
    exception that was logged and absorbed.
    """

    success: bool
    error: Exception | None = None

    def __bool__(self) -> bool:
        return self.success
