"""Locating the user's profile, the temp directory and each browser's History file.

Platform lookups sit behind `Environment` so callers (and tests) can pin the
profile and temp directories to fixed paths instead of the real user's.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, cast

import yaml

from latest_history import DEFAULT_BROWSERS_FILENAME
from latest_history.utils import coerce_str, ensure_list, ensure_mapping

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_BROWSERS_PATH = REPO_ROOT / DEFAULT_BROWSERS_FILENAME


@dataclass(frozen=True)
class BrowserTarget:
    name: str
    relative_path: PurePosixPath


DEFAULT_BROWSERS: list[BrowserTarget] = [
    BrowserTarget(
        name="Chrome",
        relative_path=PurePosixPath("AppData/Local/Google/Chrome/User Data/Default/History"),
    ),
    BrowserTarget(
        name="Edge",
        relative_path=PurePosixPath("AppData/Local/Microsoft/Edge/User Data/Default/History"),
    ),
]


@dataclass
class Environment:
    """Profile and temp directory provider.

    Fields left as None fall back to the platform lookup. The temp directory
    lookup happens when a snapshot is created, so its failure only skips that pass.
    """

    profile_dir: Path | None = None
    temp_dir: Path | None = None

    def resolve_profile_dir(self) -> Path | None:
        if self.profile_dir is not None:
            return self.profile_dir
        try:
            return Path.home()
        except (RuntimeError, KeyError) as exc:
            logger.debug("Profile directory lookup failed: %s", exc)
            return None


def history_paths(
    profile_dir: Path, browsers: list[BrowserTarget]
) -> list[tuple[BrowserTarget, Path]]:
    return [(browser, profile_dir.joinpath(*browser.relative_path.parts)) for browser in browsers]


def load_browser_targets(path: Path | None = None) -> list[BrowserTarget]:
    """Load browser targets from a YAML file.

    Missing files fall back to DEFAULT_BROWSERS, with a warning when the path
    was given explicitly. Entries without a name or path are skipped.
    """
    targets_path = path or DEFAULT_BROWSERS_PATH
    if not targets_path.exists():
        if path is not None:
            print(f"[warn] Missing browsers config: {targets_path}; using defaults")
        logger.debug("No browsers config at %s, using defaults", targets_path)
        return list(DEFAULT_BROWSERS)

    payload_obj: object = yaml.safe_load(targets_path.read_text(encoding="utf-8")) or {}
    payload = ensure_mapping(payload_obj, context=f"{targets_path}")
    if "browsers" not in payload:
        raise ValueError(f"Expected browsers list in {targets_path}")
    raw_browsers = ensure_list(payload["browsers"], context=f"{targets_path} browsers")

    targets: list[BrowserTarget] = []
    for entry_obj in raw_browsers:
        if not isinstance(entry_obj, dict):
            continue
        entry = cast(dict[str, Any], entry_obj)
        name = coerce_str(entry.get("name"))
        relative = coerce_str(entry.get("path"))
        if not name or not relative:
            continue
        targets.append(
            BrowserTarget(name=name, relative_path=PurePosixPath(relative.replace("\\", "/")))
        )
    return targets
