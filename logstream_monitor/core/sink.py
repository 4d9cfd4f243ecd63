"""Transcript and notes sink."""

from __future__ import annotations

from collections import deque

from ..types import MonitorSurface


def _as_text(data: object) -> str:
    if data is None:
        return ""
    return data if isinstance(data, str) else str(data)


class TranscriptSink:
    """Appends log lines and notes to their surfaces, keeping a copy for export.

    The transcript copy honours the same scrollback limit as the terminal
    surface; notes are never evicted.
    """

    def __init__(self, surface: MonitorSurface, scrollback: int = 200) -> None:
        self._surface = surface
        self.transcript: deque[str] = deque(maxlen=scrollback)
        self.notes: list[str] = []

    def append_log(self, line: object) -> None:
        text = _as_text(line)
        self.transcript.append(text)
        self._surface.write_log(text)

    def append_note(self, note: object) -> None:
        text = _as_text(note)
        self.notes.append(text)
        self._surface.add_note(text)
