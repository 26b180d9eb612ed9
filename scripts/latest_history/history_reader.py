from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from latest_history.utils import decode_url, webkit_to_unix

logger = logging.getLogger(__name__)

HISTORY_QUERY = """
SELECT u.url, v.visit_time
FROM urls u
JOIN visits v ON u.id = v.url
ORDER BY v.visit_time DESC
""".strip()


class HistoryQueryError(Exception):
    pass


@dataclass
class HistoryRecord:
    url: str
    visit_time_raw: int

    @property
    def visit_time(self) -> int:
        return webkit_to_unix(self.visit_time_raw)


@dataclass(frozen=True)
class TimeWindow:
    reference_time: int
    window_seconds: int

    def contains(self, unix_time: int) -> bool:
        # One-sided: visits after reference_time are always inside.
        return self.reference_time - unix_time <= self.window_seconds


def open_readonly(db_path: Path) -> sqlite3.Connection:
    uri = f"{Path(db_path).resolve().as_uri()}?mode=ro"
    try:
        conn = sqlite3.connect(uri, uri=True)
    except sqlite3.Error as exc:
        raise HistoryQueryError(f"Failed to open database: {db_path}") from exc
    conn.text_factory = bytes
    return conn


def iter_recent_visits(db_path: Path, window: TimeWindow) -> Iterator[HistoryRecord]:
    """Yield visits inside `window`, most recent first.

    Every row is read and converted; filtering happens here rather than in SQL.
    The connection is closed when the generator finishes or is closed early.
    """
    conn = open_readonly(db_path)
    scanned = matched = 0
    try:
        try:
            cursor = conn.execute(HISTORY_QUERY)
        except sqlite3.Error as exc:
            raise HistoryQueryError(f"Failed to prepare statement: {exc}") from exc
        try:
            for raw_url, raw_time in cursor:
                scanned += 1
                record = HistoryRecord(url=decode_url(raw_url), visit_time_raw=int(raw_time or 0))
                if not window.contains(record.visit_time):
                    continue
                matched += 1
                yield record
        except sqlite3.Error as exc:
            raise HistoryQueryError(
                f"Failed to read rows after {scanned} visits: {exc}"
            ) from exc
        finally:
            cursor.close()
    finally:
        conn.close()
        logger.debug("Scanned %d visits in %s, %d in window", scanned, db_path, matched)
