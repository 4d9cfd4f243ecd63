"""Elapsed-time formatting for the session age row."""

from __future__ import annotations


def format_duration(seconds: int) -> str:
    """Format whole seconds as ``HH:MM:SS``.

    Hours are not wrapped at 24. Negative input (clock skew between the
    local machine and backend timestamps) is clamped to zero.
    """
    seconds = max(int(seconds), 0)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
