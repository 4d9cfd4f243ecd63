"""Headless monitor: no TUI, same SessionMonitor pipeline."""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path
from typing import Callable, TextIO

from ..core.connection import default_connect
from ..core.monitor import SessionMonitor
from ..core.timers import AsyncioScheduler
from ..types import MonitorConfig, SessionStatus
from .state import save_session


class HeadlessSurface:
    """Prints the transcript to stdout and everything else to stderr.

    The age is only printed on status changes and at the end, so the
    output stays a clean transcript when piped.
    """

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._out = out or sys.stdout
        self._err = err or sys.stderr
        self.age: str | None = None
        self.age_visible = False
        self.status: SessionStatus | None = None
        self.dimmed = False

    def info(self, text: str) -> None:
        print(text, file=self._err, flush=True)

    def show_status(self, status: SessionStatus) -> None:
        if status is self.status:
            return
        self.status = status
        suffix = f" (age {self.age})" if self.age_visible and self.age else ""
        self.info(f"[status] {status.value}{suffix}")

    def show_age_row(self, visible: bool) -> None:
        self.age_visible = visible

    def set_age(self, text: str) -> None:
        self.age = text

    def show_notice(self, title: str, body: str, severity: str = "error") -> None:
        self.info(f"[{severity}] {title}: {body}")

    def dim(self) -> None:
        self.dimmed = True

    def write_log(self, line: str) -> None:
        print(line, file=self._out, flush=True)

    def add_note(self, text: str) -> None:
        self.info(f"[note] {text}")

    def show_disconnected(self) -> None:
        self.info("[status] disconnected")


class HeadlessMonitor:
    """Run one monitor session on a plain asyncio loop."""

    def __init__(
        self,
        session_id: str | None,
        config: MonitorConfig | None = None,
        origin: str | None = None,
        surface: HeadlessSurface | None = None,
        clock: Callable[[], float] = time.time,
        connect: Callable = default_connect,
    ) -> None:
        self._session_id = session_id
        self._config = config or MonitorConfig()
        self._origin = origin
        self._clock = clock
        self._connect = connect
        self.surface = surface or HeadlessSurface()
        self.monitor: SessionMonitor | None = None

    def run(self, save: bool = False, output: Path | str | None = None) -> SessionMonitor:
        """Block until the session ends. Optionally export it afterwards."""
        return asyncio.run(self.run_async(save=save, output=output))

    async def run_async(
        self, save: bool = False, output: Path | str | None = None
    ) -> SessionMonitor:
        self.monitor = SessionMonitor(
            self._session_id,
            surface=self.surface,
            scheduler=AsyncioScheduler(),
            config=self._config,
            origin=self._origin,
            clock=self._clock,
            connect=self._connect,
        )
        try:
            await self.monitor.start()
        finally:
            self.monitor.tracker.pause()

        if self.surface.age_visible and self.surface.age:
            self.surface.info(f"Session duration: {self.surface.age}")

        if save and self._session_id:
            out_dir = str(output) if output is not None else self._config.export_dir
            path = save_session(
                self.monitor.view,
                self.monitor.sink.transcript,
                self.monitor.sink.notes,
                directory=out_dir,
                disconnected=self.monitor.disconnected,
            )
            self.surface.info(f"Session saved to {path.resolve()}")
        return self.monitor
