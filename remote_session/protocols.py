"""Protocol interfaces for the collaborators a session depends on.

Defines the two capabilities RemoteSession consumes, so that callers can
inject their own implementations (or mocks in tests).

Usage Example:

    import logging

    from remote_session import RemoteSession

    session = RemoteSession(
        "10.0.0.5", 22, "deploy", "secret",
        logger=logging.getLogger("deploy"),  # any SessionLogger
    )

    # Or a fake transport for testing
    async def fake_connect(host, **options):
        return fake_connection

    session = RemoteSession("h", 22, "u", "p", connector=fake_connect)
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SessionLogger(Protocol):
    """Protocol for the leveled logger a session writes to.

    ``logging.Logger`` satisfies this protocol. Implementations must never
    raise from a write, since writes happen inside error-handling paths.
    """

    def debug(self, msg: str, *args: Any) -> None: ...

    def info(self, msg: str, *args: Any) -> None: ...

    def warning(self, msg: str, *args: Any) -> None: ...

    def error(self, msg: str, *args: Any) -> None: ...

    def critical(self, msg: str, *args: Any) -> None: ...


@runtime_checkable
class TransportConnector(Protocol):
    """Protocol for opening an authenticated SSH connection.

    ``asyncssh.connect`` satisfies this protocol. The returned object must
    provide ``create_session(factory, command, **kwargs)``, ``close()``
    and ``wait_closed()`` like ``asyncssh.SSHClientConnection``.

    Example implementation:
        async def connector(host: str, **options: Any) -> Any:
            # options: port, username, password, known_hosts, ...
            return await asyncssh.connect(host, **options)
    """

    async def __call__(self, host: str, **options: Any) -> Any:
        """Open a connection to host.

        Raises:
            asyncssh.Error: If the handshake fails
            OSError: If the host cannot be reached
        """
        ...
