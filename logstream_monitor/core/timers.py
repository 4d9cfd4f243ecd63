"""Periodic timers: an owned, re-armable handle and an asyncio scheduler."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from ..types import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class PeriodicTimer:
    """Owns at most one live periodic callback.

    ``rearm()`` cancels the previous handle before installing the new one,
    so two tickers can never run side by side for the same owner.
    """

    def __init__(self, scheduler: Scheduler, interval: float) -> None:
        self._scheduler = scheduler
        self._interval = interval
        self._handle: TimerHandle | None = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def rearm(self, callback: Callable[[], None]) -> None:
        self.cancel()
        self._handle = self._scheduler.set_interval(self._interval, callback)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.stop()
            self._handle = None


class _AsyncioInterval:
    """Repeating ``loop.call_later`` chain, stoppable at any point."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval: float,
        callback: Callable[[], None],
    ) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._stopped = False
        self._pending = loop.call_later(interval, self._fire)

    def _fire(self) -> None:
        if self._stopped:
            return
        try:
            self._callback()
        except Exception:
            logger.exception("Periodic callback failed")
        if not self._stopped:
            self._pending = self._loop.call_later(self._interval, self._fire)

    def stop(self) -> None:
        self._stopped = True
        self._pending.cancel()


class AsyncioScheduler:
    """Scheduler for headless mode, bound to the running event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def set_interval(self, interval: float, callback: Callable[[], None]) -> _AsyncioInterval:
        loop = self._loop or asyncio.get_running_loop()
        return _AsyncioInterval(loop, interval, callback)
