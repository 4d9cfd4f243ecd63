"""Read-only terminal transcript."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import RichLog


class TranscriptView(RichLog):
    """Log lines as terminal rows. ANSI colours are kept, markup is not interpreted.

    The oldest rows are evicted once ``scrollback`` is exceeded.
    """

    DEFAULT_CSS = """
    TranscriptView {
        padding: 0 1;
    }
    """

    def __init__(self, scrollback: int = 200, **kwargs) -> None:
        super().__init__(
            max_lines=scrollback,
            markup=False,
            highlight=False,
            wrap=True,
            auto_scroll=True,
            **kwargs,
        )

    def write_line(self, line: str) -> None:
        self.write(Text.from_ansi(line))
