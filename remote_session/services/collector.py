"""Output collection for a single command channel."""

import asyncio
import logging

import asyncssh

from remote_session.models import ExecutionResult, OutputChunk, StreamSource

logger = logging.getLogger(__name__)


class OutputCollector(asyncssh.SSHClientSession):  # type: ignore[misc]
    """Collects the stdout/stderr chunks and exit status of one channel.

    Both substreams feed one append-only list in arrival order. The result
    is settled exactly once, when the channel reports it is closed.
    """

    def __init__(self) -> None:
        self.chunks: list[OutputChunk] = []
        self.exit_code: int | None = None
        self.signal: str | None = None
        self._closed: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        # Set only by connection_lost; a cancelled waiter must not count as closed
        self._settled = False

    def data_received(self, data: str, datatype: int | None) -> None:
        """Append a chunk from either substream."""
        if datatype == asyncssh.EXTENDED_DATA_STDERR:
            source = StreamSource.STDERR
        else:
            source = StreamSource.STDOUT
        self.chunks.append(OutputChunk(source=source, data=data))

    def exit_status_received(self, status: int) -> None:
        self.exit_code = status

    def exit_signal_received(
        self,
        signal: str,
        core_dumped: bool,
        msg: str,
        lang: str,
    ) -> None:
        logger.debug("Remote process terminated by signal %s (core_dumped=%s)", signal, core_dumped)
        self.signal = signal

    def connection_lost(self, exc: Exception | None) -> None:
        """Settle the collector; ``exc`` is set when the channel died uncleanly."""
        if self._settled:
            return
        self._settled = True
        if self._closed.done():
            return
        if exc is None:
            self._closed.set_result(None)
        else:
            self._closed.set_exception(exc)

    @property
    def done(self) -> bool:
        return self._settled

    async def result(self) -> ExecutionResult:
        """Wait for the close event and return the collected result.

        Raises:
            Exception: Whatever error the channel was lost with
        """
        await asyncio.shield(self._closed)
        return ExecutionResult(
            exit_code=self.exit_code,
            signal=self.signal,
            chunks=tuple(self.chunks),
        )
