"""Remote shell session over a single SSH connection.

Example:

    session = RemoteSession("127.0.0.1", 22, "username", "password")
    if await session.connect():
        result = await session.execute("ls", ["-l"])
        print(result.data)
        await session.close()

Lifecycle:
- ``connect`` is the only way to populate ``transport`` and set ``connected``
- ``close`` is the only way to release ``transport`` and clear ``connected``
- Every await point waits forever unless a timeout is given, either per
  call or through ``default_timeout``
"""

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import Any, TypeVar

import asyncssh

from remote_session.exceptions import (
    ConfigurationError,
    HandshakeError,
    SessionTimeoutError,
    TransportError,
)
from remote_session.models import ConnectResult, Credentials, ExecutionResult
from remote_session.protocols import SessionLogger, TransportConnector
from remote_session.services.collector import OutputCollector
from remote_session.utils.shell import build_command

T = TypeVar("T")


class RemoteSession:
    """Owns one SSH connection to one host and runs commands over it."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        *,
        logger: SessionLogger | None = None,
        connector: TransportConnector | None = None,
        known_hosts: str | None = None,
        encoding: str = "utf-8",
        default_timeout: float | None = None,
    ) -> None:
        """Initialize a disconnected session.

        Args:
            host: Address of the SSH server
            port: Port of the SSH server
            username: Login name for password authentication
            password: Password for password authentication
            logger: Leveled logger to write to (module logger if None)
            connector: Callable opening the connection (asyncssh.connect if None)
            known_hosts: Path to known_hosts file, or None to disable verification
            encoding: Encoding used to decode command output
            default_timeout: Deadline in seconds applied when a call passes none
        """
        self._host = host
        self._port = port
        self._credentials = Credentials(username=username, password=password)
        self._log: SessionLogger = logger if logger is not None else logging.getLogger(__name__)
        self._connector: TransportConnector = connector or asyncssh.connect
        self._known_hosts = known_hosts
        self.encoding = encoding
        self.default_timeout = default_timeout

        self.connected = False
        self.transport: Any = None
        # Connection produced by the latest handshake, not yet promoted to transport
        self._client: Any = None

    def __repr__(self) -> str:
        return (
            f"RemoteSession({self._credentials.username}@{self._host}:{self._port}, "
            f"connected={self.connected})"
        )

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def address(self) -> str:
        """Return ``host:port`` as used in log lines."""
        return f"{self._host}:{self._port}"

    def _validate(self) -> None:
        """Check that every connection field is set.

        Raises:
            ConfigurationError: If any field is empty or zero
        """
        fields = {
            "host": self._host,
            "port": self._port,
            "username": self._credentials.username,
            "password": self._credentials.password,
        }
        missing = [name for name, value in fields.items() if not value]
        if missing:
            raise ConfigurationError(self._host, self._port, missing)

    async def _with_deadline(
        self,
        awaitable: Awaitable[T],
        timeout: float | None,
        action: str,
    ) -> T:
        """Await with an optional deadline.

        Raises:
            SessionTimeoutError: If the deadline expires first
        """
        if timeout is None:
            timeout = self.default_timeout
        if timeout is None:
            return await awaitable
        try:
            return await asyncio.wait_for(awaitable, timeout)
        except asyncio.TimeoutError as e:
            raise SessionTimeoutError(self._host, self._port, action, timeout) from e

    async def connect(self, timeout: float | None = None) -> ConnectResult:
        """Validate parameters and perform the handshake.

        Failures are logged at CRITICAL level and returned, never raised.

        Args:
            timeout: Handshake deadline in seconds

        Returns:
            ConnectResult, truthy on success
        """
        if self.connected:
            self._log.debug("SSH connection (%s) already established.", self.address)
            return ConnectResult(success=True)

        try:
            self._validate()
            await self.test(timeout=timeout)
        except Exception as e:
            self._log.critical("SSH connection (%s) %s", self.address, e)
            await self._discard_client()
            self.connected = False
            return ConnectResult(success=False, error=e)

        self.transport, self._client = self._client, None
        self.connected = True
        self._log.debug("SSH connection (%s) established.", self.address)
        return ConnectResult(success=True)

    async def test(self, timeout: float | None = None) -> bool:
        """Perform the authenticated handshake.

        The resulting connection is held until ``connect`` adopts it.

        Args:
            timeout: Handshake deadline in seconds

        Returns:
            True once the transport reports ready

        Raises:
            HandshakeError: If the transport reports an error
            SessionTimeoutError: If the deadline expires
        """
        await self._discard_client()

        if self._known_hosts is None:
            self._log.warning(
                "SSH host key verification DISABLED for %s", self.address
            )

        options: dict[str, Any] = {
            "port": self._port,
            "username": self._credentials.username,
            "password": self._credentials.password,
            "known_hosts": self._known_hosts,
            "client_keys": None,
            "agent_path": None,
        }
        try:
            self._client = await self._with_deadline(
                self._connector(self._host, **options), timeout, "handshake"
            )
        except (asyncssh.Error, OSError) as e:
            raise HandshakeError(self._host, self._port, e) from e
        return True

    async def _discard_client(self) -> None:
        """Close a handshaken connection that was never adopted."""
        client, self._client = self._client, None
        if client is not None:
            client.close()
            await client.wait_closed()

    async def raw_exec(self, command: str, timeout: float | None = None) -> ExecutionResult:
        """Run a command line exactly as given.

        Args:
            command: Complete command line; no escaping is applied
            timeout: Deadline in seconds for open, output and close together

        Returns:
            ExecutionResult with exit code, signal and combined output

        Raises:
            TransportError: If not connected, or the channel fails
            SessionTimeoutError: If the deadline expires
        """
        if not self.connected or self.transport is None:
            raise TransportError(self._host, self._port, f"Not connected to {self.address}")
        self._log.debug("Executing on %s: %s", self.address, command)
        return await self._with_deadline(self._run_channel(command), timeout, "exec")

    async def _run_channel(self, command: str) -> ExecutionResult:
        try:
            channel, collector = await self.transport.create_session(
                OutputCollector, command, encoding=self.encoding, errors="replace"
            )
        except (asyncssh.Error, OSError) as e:
            raise TransportError(
                self._host,
                self._port,
                f"Failed to open command channel on {self.address}: {e}",
                e,
            ) from e

        try:
            return await collector.result()
        except (asyncssh.Error, OSError) as e:
            raise TransportError(
                self._host,
                self._port,
                f"Command channel on {self.address} lost: {e}",
                e,
            ) from e
        finally:
            if not collector.done:
                channel.close()

    async def execute(
        self,
        command: str,
        args: Sequence[str] | None = None,
        timeout: float | None = None,
    ) -> ExecutionResult:
        """Run a command with individually shell-quoted arguments.

        Args:
            command: Base command, used verbatim
            args: Untrusted arguments, each quoted as one shell word
            timeout: Deadline in seconds

        Returns:
            ExecutionResult from raw_exec
        """
        return await self.raw_exec(build_command(command, args), timeout=timeout)

    async def close(self, timeout: float | None = None) -> bool:
        """End the connection and release the transport.

        Args:
            timeout: Deadline in seconds to wait for the connection to end

        Returns:
            True once the connection has ended

        Raises:
            SessionTimeoutError: If the deadline expires (state is still cleared)
        """
        await self._discard_client()
        transport = self.transport
        if transport is None:
            self.connected = False
            return True

        try:
            transport.close()
            await self._with_deadline(transport.wait_closed(), timeout, "close")
        finally:
            self.transport = None
            self.connected = False
        self._log.debug("SSH connection (%s) closed.", self.address)
        return True
