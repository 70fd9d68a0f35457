"""Command execution data models."""

from dataclasses import dataclass, field
from enum import Enum


class StreamSource(str, Enum):
    """Which substream of a command channel a chunk arrived on."""

    STDOUT = "stdout"
    STDERR = "stderr"


@dataclass(frozen=True)
class OutputChunk:
    """A single piece of output tagged with its source stream."""

    source: StreamSource
    data: str


@dataclass(frozen=True)
class ExecutionResult:
    """Result of a remote command execution.

    ``data`` holds stdout and stderr interleaved in arrival order. The
    tagged ``chunks`` are kept for callers that need the streams apart.
    """

    exit_code: int | None
    signal: str | None
    chunks: tuple[OutputChunk, ...] = field(default_factory=tuple)

    @property
    def data(self) -> str:
        """Combined output in arrival order."""
        return "".join(chunk.data for chunk in self.chunks)

    @property
    def stdout(self) -> str:
        return self._join(StreamSource.STDOUT)

    @property
    def stderr(self) -> str:
        return self._join(StreamSource.STDERR)

    def _join(self, source: StreamSource) -> str:
        return "".join(chunk.data for chunk in self.chunks if chunk.source is source)
