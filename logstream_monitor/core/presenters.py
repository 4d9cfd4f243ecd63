"""Status and error presenters."""

from __future__ import annotations

import logging
from typing import Callable

from ..types import MonitorSurface, SessionStatus, SessionView
from .age import SessionAgeTracker

logger = logging.getLogger(__name__)

MISSING_SESSION_TITLE = "Session ID Required"
MISSING_SESSION_BODY = (
    "Please provide a session ID, e.g. "
    "logstream-monitor watch 'http://localhost:8080/?session=ULID12345'"
)
INVALID_SESSION_TITLE = "Invalid Session ID"
INVALID_SESSION_BODY = (
    "The session ID provided is not valid. "
    "Please check your URL and try again."
)


class StatusPresenter:
    """Maps the session status onto the indicator and the age ticker."""

    def __init__(
        self,
        view: SessionView,
        surface: MonitorSurface,
        tracker: SessionAgeTracker,
    ) -> None:
        self._view = view
        self._surface = surface
        self._tracker = tracker

    def apply(self, status: SessionStatus) -> None:
        self._view.status = status
        self._surface.show_status(status)
        if status is SessionStatus.RUNNING:
            self._tracker.resume()
        else:
            self._tracker.pause()


class ErrorPresenter:
    """Blocking notices. Both are final for the lifetime of the monitor."""

    def __init__(
        self,
        surface: MonitorSurface,
        status: StatusPresenter,
        tracker: SessionAgeTracker,
        close: Callable[[], None],
    ) -> None:
        self._surface = surface
        self._status = status
        self._tracker = tracker
        self._close = close

    def show_missing_session(self) -> None:
        logger.warning("No session id given, not connecting")
        self._surface.show_notice(MISSING_SESSION_TITLE, MISSING_SESSION_BODY, severity="warning")

    def show_invalid_session(self) -> None:
        logger.error("Backend rejected the session id")
        self._surface.show_notice(INVALID_SESSION_TITLE, INVALID_SESSION_BODY, severity="error")
        self._surface.dim()
        self._close()
        self._status.apply(SessionStatus.STOPPED)
        self._tracker.hide()
