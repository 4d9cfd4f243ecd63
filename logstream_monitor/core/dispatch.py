"""Pure routing of decoded frames to effects."""

from __future__ import annotations

import logging
import math

from ..types import (
    AppendLog,
    AppendNote,
    ApplyStatus,
    Effect,
    Ignore,
    RecordCreationTime,
    RecordStopTime,
    SessionStatus,
    ShowFatalError,
)
from .protocol import INVALID_SESSION_MESSAGE

logger = logging.getLogger(__name__)

CREATION_TIME = "session_creation_time"
STOP_TIME = "session_stop_time"
STATUS = "status"
LOG = "log"
NOTE = "note"


def _parse_timestamp(value: object) -> int | None:
    """Epoch seconds sent as a number or a numeric string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    return None


def dispatch(payload: dict) -> Effect:
    """Map one decoded frame to the single effect it should have.

    Unknown kinds map to ``Ignore`` so newer backends cannot break older
    clients.
    """
    kind = payload.get("type")
    data = payload.get("data")

    if kind in (CREATION_TIME, STOP_TIME):
        timestamp = _parse_timestamp(data)
        if timestamp is None:
            return Ignore(f"unparseable {kind}: {data!r}")
        if kind == CREATION_TIME:
            return RecordCreationTime(timestamp)
        return RecordStopTime(timestamp)

    if kind == STATUS:
        status = SessionStatus.parse(data)
        return ApplyStatus(status, close_connection=data == SessionStatus.STOPPED.value)

    if kind is None and payload.get("message") == INVALID_SESSION_MESSAGE:
        return ShowFatalError(INVALID_SESSION_MESSAGE)

    if kind == LOG:
        return AppendLog("" if data is None else str(data))
    if kind == NOTE:
        return AppendNote("" if data is None else str(data))

    return Ignore(f"unknown message type: {kind!r}")
