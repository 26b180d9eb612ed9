from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

import pytest
from latest_history.utils import unix_to_webkit

CHROMIUM_SCHEMA = """
CREATE TABLE urls (
  id INTEGER PRIMARY KEY,
  url LONGVARCHAR,
  title LONGVARCHAR
);

CREATE TABLE visits (
  id INTEGER PRIMARY KEY,
  url INTEGER NOT NULL,
  visit_time INTEGER NOT NULL
);
""".strip()

# Fixed reference time: 2024-06-01 12:34:56 UTC
REFERENCE_TIME = 1_717_245_296

HistoryDbFactory = Callable[[Path, Sequence[tuple[object, int]]], Path]


def write_history_db(path: Path, visits: Sequence[tuple[object, int]]) -> Path:
    """Create a Chromium-style History file with one urls row per visit.

    `visits` holds (url, unix_seconds) pairs.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    try:
        conn.executescript(CHROMIUM_SCHEMA)
        with conn:
            for url_id, (url, unix_time) in enumerate(visits, start=1):
                conn.execute("INSERT INTO urls (id, url) VALUES (?, ?)", (url_id, url))
                conn.execute(
                    "INSERT INTO visits (url, visit_time) VALUES (?, ?)",
                    (url_id, unix_to_webkit(unix_time)),
                )
    finally:
        conn.close()
    return path


@pytest.fixture()
def make_history_db() -> HistoryDbFactory:
    return write_history_db


@pytest.fixture()
def scratch_dir(tmp_path: Path) -> Path:
    temp_dir = tmp_path / "scratch"
    temp_dir.mkdir()
    return temp_dir


class FailingCursor:
    """Yields the given rows, then fails the way a damaged page does mid-scan."""

    def __init__(self, rows: Sequence[tuple[bytes, int]]) -> None:
        self.rows = rows
        self.closed = False

    def __iter__(self) -> Iterator[tuple[bytes, int]]:
        yield from self.rows
        raise sqlite3.DatabaseError("database disk image is malformed")

    def close(self) -> None:
        self.closed = True


class FailingConnection:
    def __init__(self, rows: Sequence[tuple[bytes, int]]) -> None:
        self.cursor = FailingCursor(rows)
        self.closed = False

    def execute(self, _query: str) -> FailingCursor:
        return self.cursor

    def close(self) -> None:
        self.closed = True
