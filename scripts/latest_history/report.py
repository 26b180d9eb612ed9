"""Print recent visits for each configured browser."""

from __future__ import annotations

import logging
from contextlib import closing
from pathlib import Path

from latest_history.environment import BrowserTarget, Environment, history_paths
from latest_history.history_reader import (
    HistoryQueryError,
    HistoryRecord,
    TimeWindow,
    iter_recent_visits,
)
from latest_history.snapshot import SnapshotError, snapshot
from latest_history.utils import format_utc

logger = logging.getLogger(__name__)


def format_record(record: HistoryRecord) -> str:
    return f"URL: {record.url}, Visit Time (UTC): {format_utc(record.visit_time)}"


def print_recent_urls(db_path: Path, window: TimeWindow, temp_dir: Path | None = None) -> int:
    """Snapshot one History database and print its visits inside `window`.

    Failures are printed and end this pass only. Returns the number of visits printed.
    """
    printed = 0
    try:
        with snapshot(db_path, temp_dir) as snapshot_path:
            with closing(iter_recent_visits(snapshot_path, window)) as records:
                for record in records:
                    print(format_record(record))
                    printed += 1
    except SnapshotError as exc:
        print(f"Failed to copy database: {exc}")
        print(f"Failed to copy database to temporary file: {db_path}")
    except HistoryQueryError as exc:
        print(exc)
    return printed


def run_report(browsers: list[BrowserTarget], window: TimeWindow, environment: Environment) -> int:
    profile_dir = environment.resolve_profile_dir()
    if profile_dir is None:
        print("Failed to get user profile path.")
        return 1

    logger.debug("Profile directory %s, temp directory %s", profile_dir, environment.temp_dir)
    for index, (browser, db_path) in enumerate(history_paths(profile_dir, browsers)):
        header = f"Checking {browser.name} browsing history:"
        print(header if index == 0 else f"\n{header}")
        print_recent_urls(db_path, window, environment.temp_dir)
    return 0
