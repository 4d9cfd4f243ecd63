"""SessionMonitor: applies dispatched effects to the session's presenters."""

from __future__ import annotations

import logging
import time
from typing import Callable

from ..types import (
    AppendLog,
    AppendNote,
    ApplyStatus,
    ConnectionState,
    Effect,
    Ignore,
    MonitorConfig,
    MonitorSurface,
    RecordCreationTime,
    RecordStopTime,
    Scheduler,
    SessionStatus,
    SessionView,
    ShowFatalError,
)
from .age import SessionAgeTracker
from .connection import ConnectionManager, default_connect
from .dispatch import dispatch
from .presenters import ErrorPresenter, StatusPresenter
from .protocol import subscriber_url
from .sink import TranscriptSink

logger = logging.getLogger(__name__)


class SessionMonitor:
    """Imperative shell around ``dispatch``.

    The connection is the only ingress: each decoded frame becomes exactly
    one effect, applied to exactly one of the presenters, the age tracker,
    or the sink. After a fatal error nothing else is applied.
    """

    def __init__(
        self,
        session_id: str | None,
        surface: MonitorSurface,
        scheduler: Scheduler,
        config: MonitorConfig | None = None,
        origin: str | None = None,
        clock: Callable[[], float] = time.time,
        connect: Callable = default_connect,
    ) -> None:
        self.config = config or MonitorConfig()
        self.view = SessionView(session_id=session_id)
        self.surface = surface
        self.tracker = SessionAgeTracker(
            self.view,
            surface,
            scheduler,
            clock=clock,
            tick_interval=self.config.tick_interval,
        )
        self.status = StatusPresenter(self.view, surface, self.tracker)
        self.sink = TranscriptSink(surface, scrollback=self.config.scrollback)
        self.connection: ConnectionManager | None = None
        if session_id:
            self.connection = ConnectionManager(
                subscriber_url(origin or self.config.origin, session_id),
                on_payload=self.handle,
                on_close=self._on_connection_closed,
                heartbeat_interval=self.config.heartbeat_interval,
                connect=connect,
            )
        self.errors = ErrorPresenter(surface, self.status, self.tracker, close=self.close)
        self.halted = False
        self.disconnected = False

        self.status.apply(SessionStatus.STOPPED)

    async def start(self) -> None:
        """Validate the session id, then stream until the connection ends."""
        if self.connection is None:
            self.halted = True
            self.errors.show_missing_session()
            return
        await self.connection.run()

    def close(self) -> None:
        if self.connection is not None:
            self.connection.close()

    def handle(self, payload: dict) -> None:
        if self.halted:
            return
        self.apply(dispatch(payload))

    def apply(self, effect: Effect) -> None:
        if isinstance(effect, RecordCreationTime):
            self.tracker.on_creation_time(effect.timestamp)
        elif isinstance(effect, RecordStopTime):
            self.tracker.on_stop_time(effect.timestamp)
        elif isinstance(effect, ApplyStatus):
            self.status.apply(effect.status)
            if effect.close_connection:
                self.close()
        elif isinstance(effect, ShowFatalError):
            self.halted = True
            self.errors.show_invalid_session()
        elif isinstance(effect, AppendLog):
            self.sink.append_log(effect.line)
        elif isinstance(effect, AppendNote):
            self.sink.append_note(effect.text)
        elif isinstance(effect, Ignore):
            logger.debug("Ignored frame: %s", effect.reason)

    @property
    def connection_state(self) -> ConnectionState:
        if self.connection is None:
            return ConnectionState.CLOSED
        return self.connection.state

    def _on_connection_closed(self, expected: bool) -> None:
        self.tracker.pause()
        if expected or self.halted:
            return
        # Closed underneath us without a terminal status: still final, but visible.
        self.disconnected = True
        if self.view.status is not SessionStatus.STOPPED:
            self.status.apply(SessionStatus.STOPPED)
        self.surface.show_disconnected()
