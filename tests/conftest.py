"""Shared fixtures and fakes for logstream-monitor tests."""

from __future__ import annotations

import asyncio
import json

import pytest
from websockets.exceptions import ConnectionClosedError

from logstream_monitor.core.monitor import SessionMonitor
from logstream_monitor.types import MonitorConfig, SessionStatus

T0 = 1_760_000_000  # fixed epoch seconds used as "now" in tests

_END = object()
_DROP = object()


class FakeSurface:
    """Records everything the monitor asks a display to do."""

    def __init__(self):
        self.statuses: list[SessionStatus] = []
        self.age_visible = False
        self.age: str | None = None
        self.ages: list[str] = []
        self.notices: list[tuple[str, str, str]] = []
        self.dimmed = False
        self.logs: list[str] = []
        self.notes: list[str] = []
        self.disconnects = 0

    @property
    def status(self) -> SessionStatus | None:
        return self.statuses[-1] if self.statuses else None

    def show_status(self, status: SessionStatus) -> None:
        self.statuses.append(status)

    def show_age_row(self, visible: bool) -> None:
        self.age_visible = visible

    def set_age(self, text: str) -> None:
        self.age = text
        self.ages.append(text)

    def show_notice(self, title: str, body: str, severity: str = "error") -> None:
        self.notices.append((title, body, severity))

    def dim(self) -> None:
        self.dimmed = True

    def write_log(self, line: str) -> None:
        self.logs.append(line)

    def add_note(self, text: str) -> None:
        self.notes.append(text)

    def show_disconnected(self) -> None:
        self.disconnects += 1


class FakeTimer:
    def __init__(self, interval: float, callback):
        self.interval = interval
        self.callback = callback
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeScheduler:
    """Manual scheduler: timers only fire when a test calls ``tick()``."""

    def __init__(self):
        self.timers: list[FakeTimer] = []

    def set_interval(self, interval: float, callback) -> FakeTimer:
        timer = FakeTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.stopped]

    def tick(self, times: int = 1) -> None:
        for _ in range(times):
            for timer in self.active:
                timer.callback()


class FakeClock:
    def __init__(self, now: float = T0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeWebSocket:
    """In-memory stand-in for a websockets client connection.

    Frames pushed by a test are yielded in order; ``end()`` finishes the
    stream cleanly and ``drop()`` fails it the way a lost network does.
    """

    def __init__(self, frames=(), hold_open: bool = True):
        self.sent: list[str] = []
        self.closed = False
        self.close_calls = 0
        self._queue: asyncio.Queue = asyncio.Queue()
        for frame in frames:
            self.push(frame)
        if not hold_open:
            self.end()

    def push(self, frame) -> None:
        self._queue.put_nowait(frame if isinstance(frame, (str, bytes)) else json.dumps(frame))

    def end(self) -> None:
        self._queue.put_nowait(_END)

    def drop(self) -> None:
        self._queue.put_nowait(_DROP)

    @property
    def pings(self) -> list[dict]:
        return [json.loads(s) for s in self.sent]

    async def send(self, data: str) -> None:
        if self.closed:
            raise ConnectionClosedError(None, None)
        self.sent.append(data)

    async def close(self) -> None:
        self.close_calls += 1
        if not self.closed:
            self.closed = True
            self._queue.put_nowait(_END)

    def __aiter__(self):
        return self._frames()

    async def _frames(self):
        while True:
            item = await self._queue.get()
            if item is _END:
                return
            if item is _DROP:
                self.closed = True
                raise ConnectionClosedError(None, None)
            yield item

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.closed = True
        return False


class FakeConnect:
    """Replaces ``websockets.connect``; records every URL it was asked for."""

    def __init__(self, ws: FakeWebSocket | None = None, error: Exception | None = None):
        self.ws = ws
        self.error = error
        self.urls: list[str] = []

    def __call__(self, url: str):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.ws


async def settle(seconds: float = 0.01) -> None:
    """Let pending tasks on the loop run."""
    await asyncio.sleep(seconds)


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fast_config() -> MonitorConfig:
    return MonitorConfig(heartbeat_interval=0.01, tick_interval=1.0, scrollback=200)


@pytest.fixture
def make_monitor(surface, scheduler, clock, fast_config):
    """Build a SessionMonitor wired to fakes; returns (monitor, connect)."""

    def _make(session_id: str | None = "ULID12345", ws: FakeWebSocket | None = None,
              error: Exception | None = None, config: MonitorConfig | None = None):
        connect = FakeConnect(ws, error=error)
        monitor = SessionMonitor(
            session_id,
            surface=surface,
            scheduler=scheduler,
            config=config or fast_config,
            clock=clock,
            connect=connect,
        )
        return monitor, connect

    return _make
