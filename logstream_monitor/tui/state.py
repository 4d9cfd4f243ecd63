"""Data layer for exporting what a monitor run has shown."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from ..core.duration import format_duration
from ..types import SessionView

_UNSAFE_RE = re.compile(r"[^A-Za-z0-9._-]+")


def session_to_export_dict(
    view: SessionView,
    transcript: Iterable[str],
    notes: Iterable[str],
    disconnected: bool = False,
) -> dict:
    """Serializable dict for JSON export."""
    duration = None
    if view.creation_time is not None and view.stop_time is not None:
        duration = format_duration(view.stop_time - view.creation_time)
    return {
        "session_id": view.session_id,
        "status": view.status.value,
        "disconnected": disconnected,
        "creation_time": view.creation_time,
        "stop_time": view.stop_time,
        "duration": duration,
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "transcript": list(transcript),
        "notes": list(notes),
    }


def save_session(
    view: SessionView,
    transcript: Iterable[str],
    notes: Iterable[str],
    directory: str = ".",
    disconnected: bool = False,
) -> Path:
    """Save transcript and notes to lsm-session-{id}.json. Returns the file path."""
    safe_id = _UNSAFE_RE.sub("_", view.session_id or "unknown")
    path = Path(directory) / f"lsm-session-{safe_id}.json"
    data = session_to_export_dict(view, transcript, notes, disconnected=disconnected)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False))
    return path
