"""CLI: logstream-monitor watch, url, config validate."""

from __future__ import annotations

import argparse
import sys

import yaml

from ..config import configure_logging, load_config, validate_config
from ..core.protocol import origin_from_url, session_id_from_url, subscriber_url
from ..types import MonitorConfig


def _load(args) -> MonitorConfig:
    try:
        return load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Could not load config: {e}", file=sys.stderr)
        sys.exit(1)


def _resolve_target(args, config: MonitorConfig) -> tuple[str | None, str]:
    """Session id and origin from ``--session``, the page URL, and config."""
    session_id = args.session or session_id_from_url(args.url, config.session_param)
    origin = (origin_from_url(args.url) if args.url else None) or config.origin
    return session_id, origin


def _check_config(config: MonitorConfig) -> None:
    errors = validate_config(config)
    if errors:
        print("Config errors:", file=sys.stderr)
        for err in errors:
            print(f"  - {err}", file=sys.stderr)
        sys.exit(1)


def cmd_watch(args):
    """Attach to a session and follow it until it stops."""
    config = _load(args)
    _check_config(config)
    session_id, origin = _resolve_target(args, config)

    if args.headless:
        configure_logging(config, verbose=args.verbose, console=True)

        from ..tui.headless import HeadlessMonitor

        monitor = HeadlessMonitor(session_id, config=config, origin=origin).run(save=args.save)
        if monitor.halted:
            sys.exit(1)
        return

    try:
        from ..tui.app import run_monitor
    except ImportError:
        print(
            "TUI dependencies not installed. Run: pip install logstream-monitor[tui]\n"
            "or use --headless.",
            file=sys.stderr,
        )
        sys.exit(1)

    configure_logging(config, verbose=args.verbose, console=False)
    run_monitor(session_id, config=config, origin=origin)


def cmd_url(args):
    """Print the subscriber WebSocket URL for a session."""
    config = _load(args)
    session_id, origin = _resolve_target(args, config)
    if not session_id:
        print(
            f"Session ID required: pass --session or a URL with ?{config.session_param}=<id>",
            file=sys.stderr,
        )
        sys.exit(1)
    print(subscriber_url(origin, session_id))


def cmd_config_validate(args):
    """Validate config file."""
    config = _load(args)
    errors = validate_config(config)
    if errors:
        print("Config errors:")
        for err in errors:
            print(f"  - {err}")
        sys.exit(1)
    print("Config is valid.")
    print(f"  Origin:             {config.origin}")
    print(f"  Session param:      {config.session_param}")
    print(f"  Heartbeat interval: {config.heartbeat_interval:g}s")
    print(f"  Tick interval:      {config.tick_interval:g}s")
    print(f"  Scrollback:         {config.scrollback} lines")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logstream-monitor",
        description="Follow a live log session: status, age, transcript, and notes",
    )
    parser.add_argument("--config", "-c", help="Path to config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    # watch
    watch_parser = subparsers.add_parser("watch", help="Monitor a session")
    watch_parser.add_argument(
        "url",
        nargs="?",
        help="Page URL carrying the session id, e.g. http://localhost:8080/?session=ULID12345",
    )
    watch_parser.add_argument("--session", "-s", help="Session id (overrides the URL)")
    watch_parser.add_argument(
        "--headless",
        action="store_true",
        help="Print the transcript to stdout instead of running the TUI",
    )
    watch_parser.add_argument(
        "--save",
        action="store_true",
        help="Export transcript and notes when the session ends (headless)",
    )

    # url
    url_parser = subparsers.add_parser("url", help="Print the subscriber WebSocket URL")
    url_parser.add_argument("url", nargs="?", help="Page URL carrying the session id")
    url_parser.add_argument("--session", "-s", help="Session id (overrides the URL)")

    # config validate
    config_parser = subparsers.add_parser("config", help="Config operations")
    config_sub = config_parser.add_subparsers(dest="config_command")
    config_sub.add_parser("validate", help="Validate config file")

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "watch":
        cmd_watch(args)
    elif args.command == "url":
        cmd_url(args)
    elif args.command == "config":
        if args.config_command == "validate":
            cmd_config_validate(args)
        else:
            print("Usage: logstream-monitor config validate")
            sys.exit(1)


if __name__ == "__main__":
    main()
