"""Notes column: one block per note, scrolled to the newest."""

from __future__ import annotations

from textual.containers import VerticalScroll
from textual.widgets import Static


class NotesPanel(VerticalScroll):
    DEFAULT_CSS = """
    NotesPanel {
        padding: 0 1;
    }
    NotesPanel > .note {
        margin-bottom: 1;
        padding: 0 1;
        border-left: thick $accent;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.notes: list[str] = []

    def add_note(self, text: str) -> None:
        self.notes.append(text)
        self.mount(Static(text, classes="note", markup=False))
        self.scroll_end(animate=False)
