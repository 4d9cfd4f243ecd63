"""MonitorApp: Textual application wiring the session monitor to widgets."""

from __future__ import annotations

import logging
import time
from typing import Callable

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Static

from ..core.connection import default_connect
from ..core.monitor import SessionMonitor
from ..types import MonitorConfig, SessionStatus
from .modals.notice import NoticeModal
from .state import save_session
from .widgets.notes_panel import NotesPanel
from .widgets.status_badge import AgeRow, StatusBadge
from .widgets.transcript_view import TranscriptView

logger = logging.getLogger(__name__)


class MonitorApp(App):
    """Live view of one session: status, age, transcript, and notes.

    The app is both the monitor's display surface and its scheduler
    (``App.set_interval``), so every update runs on Textual's event loop.
    """

    CSS_PATH = "monitor.tcss"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+s", "save_session", "Save Log", priority=True),
    ]

    def __init__(
        self,
        session_id: str | None,
        config: MonitorConfig | None = None,
        origin: str | None = None,
        clock: Callable[[], float] = time.time,
        connect: Callable = default_connect,
    ) -> None:
        super().__init__()
        self._session_id = session_id
        self._config = config or MonitorConfig()
        self._origin = origin
        self._clock = clock
        self._connect = connect
        self.monitor: SessionMonitor | None = None
        self.dimmed = False

    def on_mount(self) -> None:
        self.monitor = SessionMonitor(
            self._session_id,
            surface=self,
            scheduler=self,
            config=self._config,
            origin=self._origin,
            clock=self._clock,
            connect=self._connect,
        )
        if self._session_id:
            self.sub_title = self._session_id
        self._run_monitor()

    @work(exclusive=True)
    async def _run_monitor(self) -> None:
        await self.monitor.start()

    def on_unmount(self) -> None:
        if self.monitor is not None:
            self.monitor.close()

    @property
    def _status_badge(self) -> StatusBadge:
        return self.query_one("#status-badge", StatusBadge)

    @property
    def _age_row(self) -> AgeRow:
        return self.query_one("#age-row", AgeRow)

    @property
    def _transcript(self) -> TranscriptView:
        return self.query_one("#transcript", TranscriptView)

    @property
    def _notes(self) -> NotesPanel:
        return self.query_one("#notes", NotesPanel)

    # -- MonitorSurface ---------------------------------------------------

    def show_status(self, status: SessionStatus) -> None:
        self._status_badge.set_status(status)

    def show_age_row(self, visible: bool) -> None:
        self._age_row.set_visible(visible)

    def set_age(self, text: str) -> None:
        self._age_row.set_age(text)

    def show_notice(self, title: str, body: str, severity: str = "error") -> None:
        self.push_screen(NoticeModal(title, body, severity=severity))

    def dim(self) -> None:
        self.dimmed = True
        self.query_one("#main-container").add_class("dimmed")

    def write_log(self, line: str) -> None:
        self._transcript.write_line(line)

    def add_note(self, text: str) -> None:
        self._notes.add_note(text)

    def show_disconnected(self) -> None:
        self._status_badge.set_disconnected()
        self.notify("Connection to the backend was lost.", severity="warning")

    # -- Actions ----------------------------------------------------------

    def action_save_session(self) -> None:
        """Export transcript and notes to lsm-session-<id>.json."""
        if self.monitor is None or not self._session_id:
            self.notify("No session to save.", severity="warning")
            return
        path = save_session(
            self.monitor.view,
            self.monitor.sink.transcript,
            self.monitor.sink.notes,
            directory=self._config.export_dir,
            disconnected=self.monitor.disconnected,
        )
        logger.info("Session exported to %s", path)
        self.notify(f"Session saved to {path.resolve()}")

    def compose(self) -> ComposeResult:
        with Vertical(id="main-container"):
            with Horizontal(id="status-bar"):
                yield StatusBadge(id="status-badge")
                yield AgeRow(id="age-row")
            with Horizontal(id="main-layout"):
                yield TranscriptView(scrollback=self._config.scrollback, id="transcript")
                with Vertical(id="notes-column"):
                    yield Static("[bold]NOTES[/bold]", id="notes-header")
                    yield NotesPanel(id="notes")
        yield Footer()


def run_monitor(
    session_id: str | None,
    config: MonitorConfig | None = None,
    origin: str | None = None,
) -> MonitorApp:
    """Entry point for the TUI monitor."""
    app = MonitorApp(session_id, config=config, origin=origin)
    app.run()
    return app
