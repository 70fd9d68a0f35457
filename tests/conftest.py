"""Shared fixtures: a scripted stand-in for an asyncssh connection."""

import asyncio
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

Event = Callable[[Any], None]


class FakeConnection:
    """Connection whose command channels replay a scripted list of events.

    Each event is a callable applied to the collector on a later loop
    iteration, in order, mimicking asyncssh delivering channel callbacks.
    """

    def __init__(self, events: list[Event] | None = None) -> None:
        self.events: list[Event] = events or []
        self.commands: list[str] = []
        self.session_kwargs: list[dict[str, Any]] = []
        self.channels: list[MagicMock] = []
        self.close = MagicMock()
        self.wait_closed = AsyncMock()
        self.create_session = AsyncMock(side_effect=self._create_session)

    async def _create_session(
        self, factory: Callable[[], Any], command: str, **kwargs: Any
    ) -> tuple[MagicMock, Any]:
        self.commands.append(command)
        self.session_kwargs.append(kwargs)
        collector = factory()
        channel = MagicMock()
        self.channels.append(channel)
        collector.connection_made(channel)
        loop = asyncio.get_running_loop()
        for event in self.events:
            loop.call_soon(event, collector)
        return channel, collector


@pytest.fixture
def make_connection() -> Callable[..., FakeConnection]:
    """Factory for FakeConnection instances."""
    return FakeConnection


@pytest.fixture
def fake_logger() -> MagicMock:
    """Logger double recording every leveled write."""
    return MagicMock(spec=["debug", "info", "warning", "error", "critical"])
