"""Shared fixtures: a manual clock for transient display styles and a fake HTTP session."""
import asyncio
from typing import Callable, List, Optional, Tuple, Union

import aiohttp
import pytest


class FakeTimer:
    """Cancellable handle returned by FakeScheduler."""

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Scheduler whose clock only moves when advance() is called."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[FakeTimer]:
        return [timer for timer in self.timers if not timer.cancelled]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted((t for t in self.pending if t.when <= self.now), key=lambda t: t.when)
        for timer in due:
            self.timers.remove(timer)
            timer.callback()


@pytest.fixture
def scheduler() -> FakeScheduler:
    """Create a scheduler with a manual clock."""
    return FakeScheduler()


class FakeResponse:
    """Mock aiohttp response."""

    def __init__(self, status: int = 200, body: Union[str, bytes] = "", gate: Optional[asyncio.Event] = None):
        self.status = status
        self.body = body
        self.gate = gate

    async def read(self) -> bytes:
        # Hold the response back until the test opens the gate
        if self.gate is not None:
            await self.gate.wait()
        return self.body if isinstance(self.body, bytes) else self.body.encode("utf-8")

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False


class FakeSession:
    """Mock aiohttp session recording the posted requests."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.requests: List[Tuple[str, dict]] = []
        self.options: dict = {}

    def post(self, url: str, json=None, **kwargs) -> FakeResponse:
        self.requests.append((url, json))
        if self.error is not None:
            raise self.error
        return self.response

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False


@pytest.fixture
def fake_session(monkeypatch):
    """
    Make aiohttp.ClientSession return a fake session.

    Usage: ``session = fake_session(status=200, body='{"result": 4}')``
    """

    def install(
        status: int = 200,
        body: Union[str, bytes] = "",
        gate: Optional[asyncio.Event] = None,
        error: Optional[Exception] = None,
    ) -> FakeSession:
        session = FakeSession(FakeResponse(status, body, gate), error)

        def factory(*args, **kwargs):
            session.options = kwargs
            return session

        monkeypatch.setattr(aiohttp, "ClientSession", factory)
        return session

    return install
