"""Shared constants for the latest-browsing-history tooling."""

DEFAULT_BROWSERS_FILENAME = "config/browsers.yaml"
DEFAULT_WINDOW_MINUTES = 10
WINDOW_ENV_VAR = "LATEST_HISTORY_WINDOW_MINUTES"
SNAPSHOT_PREFIX = "dbcopy"
SNAPSHOT_SUFFIX = ".tmp"


__all__ = [
    "DEFAULT_BROWSERS_FILENAME",
    "DEFAULT_WINDOW_MINUTES",
    "WINDOW_ENV_VAR",
    "SNAPSHOT_PREFIX",
    "SNAPSHOT_SUFFIX",
]
