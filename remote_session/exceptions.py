"""Error hierarchy for remote sessions."""


class SessionError(Exception):
    """Base class for all remote session failures."""

    def __init__(
        self,
        host: str,
        port: int,
        message: str,
        original_error: Exception | None = None,
    ):
        """Initialize session error.

        Args:
            host: Target host of the session
            port: Target port of the session
            message: Human-readable description of the failure
            original_error: Underlying exception, if any
        """
        self.host = host
        self.port = port
        self.original_error = original_error
        super().__init__(message)


class ConfigurationError(SessionError):
    """One or more required connection fields are missing."""

    def __init__(self, host: str, port: int, missing: list[str]):
        self.missing = missing
        super().__init__(
            host,
            port,
            f"Not all data is provided! Missing: {', '.join(missing)}",
        )


class HandshakeError(SessionError):
    """The transport reported an error while authenticating."""

    def __init__(self, host: str, port: int, original_error: Exception):
        super().__init__(
            host,
            port,
            f"Handshake with {host}:{port} failed: {original_error}",
            original_error,
        )


class TransportError(SessionError):
    """A command channel could not be opened or was lost."""


class SessionTimeoutError(SessionError):
    """A caller-supplied deadline expired before the operation settled."""

    def __init__(self, host: str, port: int, action: str, timeout: float):
        self.action = action
        self.timeout = timeout
        super().__init__(
            host,
            port,
            f"{action} on {host}:{port} timed out after {timeout}s",
        )
