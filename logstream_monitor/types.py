"""All dataclasses, enums, and Protocols for logstream-monitor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

class SessionStatus(Enum):
    RUNNING = "Running"
    STOPPED = "Stopped"

    @classmethod
    def parse(cls, value: object) -> SessionStatus:
        """Only the literal ``"Running"`` is running; anything else is stopped."""
        if value == cls.RUNNING.value:
            return cls.RUNNING
        return cls.STOPPED


class ConnectionState(Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class AgeState(Enum):
    UNKNOWN = "unknown"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass
class SessionView:
    """Single source of truth for the watched session.

    Only ever written in response to backend messages.
    """
    session_id: str | None
    status: SessionStatus = SessionStatus.STOPPED
    creation_time: int | None = None  # epoch seconds
    stop_time: int | None = None  # epoch seconds, non-None freezes the age


# ---------------------------------------------------------------------------
# Effects (output of dispatch)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RecordCreationTime:
    timestamp: int


@dataclass(frozen=True)
class RecordStopTime:
    timestamp: int


@dataclass(frozen=True)
class ApplyStatus:
    status: SessionStatus
    close_connection: bool = False


@dataclass(frozen=True)
class ShowFatalError:
    message: str


@dataclass(frozen=True)
class AppendLog:
    line: str


@dataclass(frozen=True)
class AppendNote:
    text: str


@dataclass(frozen=True)
class Ignore:
    reason: str = ""


Effect = (
    RecordCreationTime
    | RecordStopTime
    | ApplyStatus
    | ShowFatalError
    | AppendLog
    | AppendNote
    | Ignore
)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@dataclass
class MonitorConfig:
    origin: str = "http://localhost:8080"
    session_param: str = "session"
    heartbeat_interval: float = 100.0  # seconds between PING frames
    tick_interval: float = 1.0  # seconds between age refreshes
    scrollback: int = 200  # transcript lines kept before the oldest is evicted
    export_dir: str = "."
    log_level: str = "WARNING"
    log_file: str | None = None


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------

@runtime_checkable
class TimerHandle(Protocol):
    def stop(self) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """Anything that can run a callback periodically (a Textual App does)."""

    def set_interval(self, interval: float, callback: Callable[[], None]) -> TimerHandle: ...


@runtime_checkable
class MonitorSurface(Protocol):
    """Display surface driven by the monitor (TUI widgets or plain stdout)."""

    def show_status(self, status: SessionStatus) -> None: ...

    def show_age_row(self, visible: bool) -> None: ...

    def set_age(self, text: str) -> None: ...

    def show_notice(self, title: str, body: str, severity: str = "error") -> None: ...

    def dim(self) -> None: ...

    def write_log(self, line: str) -> None: ...

    def add_note(self, text: str) -> None: ...

    def show_disconnected(self) -> None: ...
