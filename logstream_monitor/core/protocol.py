"""Wire helpers: URLs, frame decoding, and the heartbeat frame."""

from __future__ import annotations

import json
import logging
from urllib.parse import parse_qs, quote, urlsplit

logger = logging.getLogger(__name__)

INVALID_SESSION_MESSAGE = "invalid session id"
PING_FRAME = {"type": "PING"}


def session_id_from_url(url: str | None, param: str = "session") -> str | None:
    """Return the session id carried in ``url``'s query string, if any."""
    if not url:
        return None
    values = parse_qs(urlsplit(url).query).get(param, [])
    for value in values:
        if value.strip():
            return value.strip()
    return None


def origin_from_url(url: str) -> str | None:
    """``scheme://host[:port]`` of a page URL, or None if it has no host."""
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}"


def subscriber_url(origin: str, session_id: str) -> str:
    """Subscriber WebSocket endpoint for ``session_id`` on ``origin``.

    The secure scheme is used when the origin itself is https.
    """
    parts = urlsplit(origin)
    scheme = "wss" if parts.scheme in ("https", "wss") else "ws"
    host = parts.netloc or parts.path.rstrip("/")
    return f"{scheme}://{host}/session/{quote(session_id, safe='')}/ws/subscriber"


def decode_frame(raw: str | bytes) -> dict | None:
    """Parse one inbound frame. Malformed or non-object frames give None."""
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
        logger.debug("Dropping malformed frame: %s", e)
        return None
    if not isinstance(payload, dict):
        logger.debug("Dropping non-object frame: %r", payload)
        return None
    return payload


def encode_ping() -> str:
    return json.dumps(PING_FRAME)
