#!/usr/bin/env python3
"""
Print URLs visited recently in Chrome and Edge.

Each browser's History database is copied to a temporary file (the live file is
usually locked by the browser), queried for visits, and the copy is removed.
Only visits within the window before "now" (10 minutes by default) are printed.
"""

from __future__ import annotations

import argparse
import logging
import os
import time
from pathlib import Path

from dotenv import load_dotenv
from latest_history import DEFAULT_WINDOW_MINUTES, WINDOW_ENV_VAR
from latest_history.environment import Environment, load_browser_targets
from latest_history.history_reader import TimeWindow
from latest_history.report import run_report
from latest_history.utils import parse_reference_time

load_dotenv()

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print recently visited URLs from browser history."
    )
    parser.add_argument(
        "--window-minutes",
        type=int,
        default=os.environ.get(WINDOW_ENV_VAR, str(DEFAULT_WINDOW_MINUTES)),
        help=f"How far back to look, in minutes (default: {DEFAULT_WINDOW_MINUTES}).",
    )
    parser.add_argument(
        "--now",
        default=None,
        help="Reference time as epoch seconds or a date string; naive values are UTC "
        "(default: current time).",
    )
    parser.add_argument(
        "--profile-dir",
        type=Path,
        default=None,
        help="User profile directory (default: the current user's home directory).",
    )
    parser.add_argument(
        "--temp-dir",
        type=Path,
        default=None,
        help="Directory for temporary database copies (default: system temp directory).",
    )
    parser.add_argument(
        "--browsers",
        type=Path,
        default=None,
        help="Path to browser targets YAML (default: config/browsers.yaml).",
    )
    parser.add_argument("--verbose", action="store_true", help="Print diagnostic logging.")
    return parser


def resolve_window(parser: argparse.ArgumentParser, args: argparse.Namespace) -> TimeWindow:
    if args.window_minutes <= 0:
        parser.error("--window-minutes must be positive")
    if args.now is None:
        reference_time = int(time.time())
    else:
        try:
            reference_time = parse_reference_time(args.now)
        except ValueError as exc:
            parser.error(str(exc))
    return TimeWindow(reference_time=reference_time, window_seconds=args.window_minutes * 60)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    window = resolve_window(parser, args)
    browsers = load_browser_targets(args.browsers)
    environment = Environment(profile_dir=args.profile_dir, temp_dir=args.temp_dir)
    logger.debug(
        "Reference time %d, window %d seconds, %d browsers",
        window.reference_time,
        window.window_seconds,
        len(browsers),
    )
    return run_report(browsers, window, environment)


if __name__ == "__main__":
    raise SystemExit(main())
