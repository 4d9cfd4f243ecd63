"""logstream-monitor: live terminal monitor for a streamed log session."""

from .config import load_config
from .core.duration import format_duration
from .core.monitor import SessionMonitor
from .types import (
    ConnectionState,
    MonitorConfig,
    SessionStatus,
    SessionView,
)

__version__ = "0.1.0"

__all__ = [
    "SessionMonitor",
    "load_config",
    "format_duration",
    "ConnectionState",
    "MonitorConfig",
    "SessionStatus",
    "SessionView",
]
