"""Copy a live (possibly locked) SQLite file to a private temp file before reading it."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from latest_history import SNAPSHOT_PREFIX, SNAPSHOT_SUFFIX

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    pass


def copy_to_snapshot(source: Path, temp_dir: Path | None = None) -> Path:
    """Copy `source` to a new, uniquely named file.

    With no `temp_dir` the platform temp directory is looked up here, so a
    failed lookup is reported like any other copy failure.
    """
    try:
        fd, name = tempfile.mkstemp(prefix=SNAPSHOT_PREFIX, suffix=SNAPSHOT_SUFFIX, dir=temp_dir)
    except OSError as exc:
        location = temp_dir or "the system temp directory"
        raise SnapshotError(f"could not create temporary file in {location}: {exc}") from exc
    os.close(fd)
    snapshot_path = Path(name)

    try:
        shutil.copyfile(source, snapshot_path)
    except OSError as exc:
        remove_snapshot(snapshot_path)
        raise SnapshotError(str(exc)) from exc

    logger.debug("Copied %s to %s", source, snapshot_path)
    return snapshot_path


def remove_snapshot(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not remove snapshot %s: %s", path, exc)
        return
    logger.debug("Removed %s", path)


@contextmanager
def snapshot(source: Path, temp_dir: Path | None = None) -> Iterator[Path]:
    snapshot_path = copy_to_snapshot(source, temp_dir)
    try:
        yield snapshot_path
    finally:
        remove_snapshot(snapshot_path)
