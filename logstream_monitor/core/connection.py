"""ConnectionManager: the single subscriber WebSocket of a monitor run."""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Callable

from websockets.asyncio.client import connect as ws_connect
from websockets.exceptions import ConnectionClosed, InvalidHandshake, InvalidURI

from ..types import ConnectionState
from .protocol import decode_frame, encode_ping

logger = logging.getLogger(__name__)

# websockets applies a 10s open timeout by default; establishment is unbounded here.
default_connect = functools.partial(ws_connect, open_timeout=None)


class ConnectionManager:
    """Owns exactly one streaming connection: open, heartbeat, dispatch, close.

    The state only moves forward (CONNECTING -> OPEN -> CLOSED) and a closed
    manager is never reopened. Every decoded frame is handed to
    ``on_payload``; ``on_close(expected)`` fires once at teardown, with
    ``expected`` True when this side initiated the close.
    """

    def __init__(
        self,
        url: str,
        on_payload: Callable[[dict], None],
        on_close: Callable[[bool], None] | None = None,
        heartbeat_interval: float = 100.0,
        connect: Callable = default_connect,
    ) -> None:
        self.url = url
        self.state = ConnectionState.CONNECTING
        self.pings_sent = 0
        self._on_payload = on_payload
        self._on_close = on_close
        self._heartbeat_interval = heartbeat_interval
        self._connect = connect
        self._ws = None
        self._heartbeat: asyncio.Task | None = None
        self._close_task: asyncio.Task | None = None
        self._closed_by_client = False
        self._started = False
        self._close_notified = False

    @property
    def heartbeat_active(self) -> bool:
        return self._heartbeat is not None and not self._heartbeat.done()

    async def run(self) -> None:
        """Connect and pump frames until either side closes."""
        if self._started:
            raise RuntimeError("ConnectionManager.run() may only be called once")
        self._started = True

        try:
            async with self._connect(self.url) as ws:
                if self.state is ConnectionState.CLOSED:
                    return
                self._ws = ws
                self.state = ConnectionState.OPEN
                logger.info("Connected to %s", self.url)
                self._heartbeat = asyncio.create_task(self._send_heartbeats())

                async for raw in ws:
                    self._handle_frame(raw)
                    if self.state is ConnectionState.CLOSED:
                        break
        except asyncio.CancelledError:
            # Cancelled by our own event loop (app exit): a local close.
            self._closed_by_client = True
            raise
        except ConnectionClosed as e:
            logger.warning("Connection to %s lost: %s", self.url, e)
        except (OSError, InvalidHandshake, InvalidURI) as e:
            logger.warning("Could not connect to %s: %s", self.url, e)
        finally:
            self._teardown()

    def close(self) -> None:
        """Client-initiated close. Safe to call any number of times."""
        if self.state is ConnectionState.CLOSED:
            return
        logger.info("Closing connection to %s", self.url)
        self._closed_by_client = True
        self.state = ConnectionState.CLOSED
        self._stop_heartbeat()
        if self._ws is not None:
            self._close_task = asyncio.ensure_future(self._ws.close())

    def _handle_frame(self, raw: str | bytes) -> None:
        payload = decode_frame(raw)
        if payload is None:
            return
        try:
            self._on_payload(payload)
        except Exception:
            logger.exception("Failed to handle frame %r", payload)

    async def _send_heartbeats(self) -> None:
        while self.state is ConnectionState.OPEN:
            await asyncio.sleep(self._heartbeat_interval)
            if self.state is not ConnectionState.OPEN or self._ws is None:
                return
            try:
                await self._ws.send(encode_ping())
            except ConnectionClosed:
                return
            self.pings_sent += 1
            logger.debug("PING sent (%d)", self.pings_sent)

    def _stop_heartbeat(self) -> None:
        if self._heartbeat is not None:
            self._heartbeat.cancel()
            self._heartbeat = None

    def _teardown(self) -> None:
        self._stop_heartbeat()
        self.state = ConnectionState.CLOSED
        self._ws = None
        if self._close_notified:
            return
        self._close_notified = True
        if not self._closed_by_client:
            logger.info("Connection to %s closed by the transport", self.url)
        if self._on_close is not None:
            self._on_close(self._closed_by_client)
