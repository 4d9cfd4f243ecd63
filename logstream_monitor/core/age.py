"""SessionAgeTracker: live and frozen session duration."""

from __future__ import annotations

import logging
import time
from typing import Callable

from ..types import AgeState, MonitorSurface, Scheduler, SessionView
from .duration import format_duration
from .timers import PeriodicTimer

logger = logging.getLogger(__name__)


class SessionAgeTracker:
    """Computes the elapsed (or total) duration of the watched session.

    UNKNOWN until a creation time arrives, RUNNING while a 1-second tick
    recomputes ``now - creation_time``, STOPPED once a stop time freezes the
    display at ``stop_time - creation_time``. A fresh creation time always
    re-enters RUNNING and forgets any earlier stop time.
    """

    def __init__(
        self,
        view: SessionView,
        surface: MonitorSurface,
        scheduler: Scheduler,
        clock: Callable[[], float] = time.time,
        tick_interval: float = 1.0,
    ) -> None:
        self._view = view
        self._surface = surface
        self._clock = clock
        self._ticker = PeriodicTimer(scheduler, tick_interval)

    @property
    def state(self) -> AgeState:
        if self._view.creation_time is None:
            return AgeState.UNKNOWN
        if self._view.stop_time is not None:
            return AgeState.STOPPED
        return AgeState.RUNNING

    @property
    def ticking(self) -> bool:
        return self._ticker.active

    def on_creation_time(self, timestamp: int) -> None:
        self._view.creation_time = timestamp
        self._view.stop_time = None
        self._surface.show_age_row(True)
        self.refresh()
        self._ticker.rearm(self.refresh)
        logger.debug("Session created at %d, age ticking", timestamp)

    def on_stop_time(self, timestamp: int) -> None:
        self._view.stop_time = timestamp
        self._ticker.cancel()
        if self._view.creation_time is None:
            logger.debug("Stop time %d before any creation time, deferring", timestamp)
            return
        self._surface.set_age(format_duration(timestamp - self._view.creation_time))

    def refresh(self) -> None:
        """Recompute the live age; no-op unless RUNNING."""
        if self.state is not AgeState.RUNNING:
            return
        now = int(self._clock())
        self._surface.set_age(format_duration(now - self._view.creation_time))

    def resume(self) -> None:
        if self.state is AgeState.RUNNING and not self._ticker.active:
            self._ticker.rearm(self.refresh)

    def pause(self) -> None:
        self._ticker.cancel()

    def hide(self) -> None:
        self._ticker.cancel()
        self._surface.show_age_row(False)
