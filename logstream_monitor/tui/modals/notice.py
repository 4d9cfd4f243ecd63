"""Blocking notice shown for fatal session errors."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Static


class NoticeModal(ModalScreen[None]):
    """Fatal notice with no dismiss binding: only quitting gets rid of it."""

    DEFAULT_CSS = """
    NoticeModal {
        align: center middle;
    }
    NoticeModal > Vertical {
        width: 70%;
        height: auto;
        border: thick $error;
        background: $surface;
        padding: 1 2;
    }
    NoticeModal.warning > Vertical {
        border: thick $warning;
    }
    NoticeModal #notice-title {
        text-style: bold;
        content-align: center middle;
        width: 100%;
        margin-bottom: 1;
    }
    NoticeModal #notice-body {
        width: 100%;
        content-align: center middle;
    }
    """

    def __init__(self, title: str, body: str, severity: str = "error") -> None:
        super().__init__(classes=severity)
        self.title_text = title
        self.body_text = body
        self.severity = severity

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(self.title_text, id="notice-title", markup=False)
            yield Static(self.body_text, id="notice-body", markup=False)
            yield Static("[dim]Ctrl+Q to quit[/dim]", id="notice-footer")
