"""Configuration loading, validation, and defaults."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import yaml

from .types import MonitorConfig

CONFIG_FILENAMES = [
    "logstream-monitor.yaml",
    "logstream-monitor.yml",
    "logstream-monitor.json",
]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _discover_config() -> Path | None:
    """Search CWD then parent dirs up to home for a config file."""
    cwd = Path.cwd()
    home = Path.home()
    search = cwd
    while True:
        for name in CONFIG_FILENAMES:
            candidate = search / name
            if candidate.is_file():
                return candidate
        if search == home or search == search.parent:
            break
        search = search.parent
    return None


def _build_config(raw: dict[str, Any]) -> MonitorConfig:
    """Build a MonitorConfig from a raw dict."""
    defaults = MonitorConfig()
    connection = raw.get("connection", {})
    display = raw.get("display", {})
    logging_raw = raw.get("logging", {})

    return MonitorConfig(
        origin=connection.get("origin", raw.get("origin", defaults.origin)),
        session_param=connection.get("session_param", defaults.session_param),
        heartbeat_interval=float(
            connection.get("heartbeat_interval", defaults.heartbeat_interval)
        ),
        tick_interval=float(display.get("tick_interval", defaults.tick_interval)),
        scrollback=int(display.get("scrollback", defaults.scrollback)),
        export_dir=str(display.get("export_dir", defaults.export_dir)),
        log_level=str(logging_raw.get("level", defaults.log_level)).upper(),
        log_file=logging_raw.get("file", defaults.log_file),
    )


def validate_config(config: MonitorConfig) -> list[str]:
    """Validate a config. Returns list of error strings (empty = valid)."""
    errors: list[str] = []

    origin = urlsplit(config.origin)
    if origin.scheme not in ("http", "https") or not origin.netloc:
        errors.append(
            f"origin must be an http:// or https:// URL with a host, got '{config.origin}'"
        )

    if not config.session_param:
        errors.append("session_param must not be empty")

    if config.heartbeat_interval <= 0:
        errors.append(f"heartbeat_interval ({config.heartbeat_interval}) must be > 0")

    if config.tick_interval <= 0:
        errors.append(f"tick_interval ({config.tick_interval}) must be > 0")

    if config.scrollback < 1:
        errors.append("scrollback must be >= 1")

    if config.log_level not in LOG_LEVELS:
        errors.append(
            f"Unknown log level '{config.log_level}' (expected one of {', '.join(LOG_LEVELS)})"
        )

    return errors


def load_config(
    config_path: str | Path | None = None,
    config_dict: dict | None = None,
) -> MonitorConfig:
    """Load config from dict, explicit path, or auto-discover."""
    if config_dict is not None:
        return _build_config(config_dict)

    if config_path is not None:
        path = Path(config_path)
    else:
        path = _discover_config()

    if path is None:
        # Return defaults
        return _build_config({})

    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    text = path.read_text()
    if path.suffix == ".json":
        raw = json.loads(text)
    else:
        raw = yaml.safe_load(text) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config root must be a mapping: {path}")

    return _build_config(raw)


def configure_logging(config: MonitorConfig, verbose: bool = False, console: bool = True) -> None:
    """Set up root logging once for a CLI run.

    With ``console=False`` (the TUI owns the terminal) records only go to
    ``log_file``; without a log file they are discarded.
    """
    level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING)
    handlers: list[logging.Handler] = []
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))
    elif console:
        handlers.append(logging.StreamHandler())
    else:
        handlers.append(logging.NullHandler())
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )
