"""Session status indicator and duration row."""

from __future__ import annotations

from textual.widgets import Static

from ...types import SessionStatus


class StatusBadge(Static):
    """Coloured dot plus label. Uses render() so updates are picked up on the next frame."""

    DEFAULT_CSS = """
    StatusBadge {
        width: auto;
        padding: 0 1;
    }
    StatusBadge.status-running {
        color: $success;
    }
    StatusBadge.status-stopped {
        color: $error;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.status = SessionStatus.STOPPED
        self.disconnected = False

    def set_status(self, status: SessionStatus) -> None:
        self.status = status
        if status is SessionStatus.RUNNING:
            self.disconnected = False
        running = status is SessionStatus.RUNNING
        self.set_class(running, "status-running")
        self.set_class(not running, "status-stopped")
        self.refresh(layout=True)

    def set_disconnected(self) -> None:
        self.disconnected = True
        self.refresh(layout=True)

    @property
    def label(self) -> str:
        if self.disconnected:
            return f"{self.status.value} (disconnected)"
        return self.status.value

    def render(self) -> str:
        return f"● {self.label}"


class AgeRow(Static):
    """``Session age HH:MM:SS``, hidden until a creation time is known."""

    DEFAULT_CSS = """
    AgeRow {
        width: auto;
        padding: 0 1;
        display: none;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.age = "00:00:00"

    def set_visible(self, visible: bool) -> None:
        self.display = visible

    def set_age(self, text: str) -> None:
        self.age = text
        self.refresh(layout=True)

    def render(self) -> str:
        return f"[dim]Session age[/dim] [bold]{self.age}[/bold]"
