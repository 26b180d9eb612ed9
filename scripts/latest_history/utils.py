from datetime import UTC, datetime
from typing import Any, cast

from dateutil import parser  # type: ignore[import-untyped]

# Chromium stores visit times as microseconds since 1601-01-01 UTC
WEBKIT_EPOCH_OFFSET_SECONDS = 11_644_473_600
MICROSECONDS_PER_SECOND = 1_000_000
UTC_FORMAT = "%Y-%m-%d %H:%M:%S"
INVALID_TIME = "Invalid time"


def webkit_to_unix(raw: int) -> int:
    """Convert a WebKit/Chromium timestamp (microseconds since 1601) to Unix seconds.

    Division truncates toward zero. Out-of-range values are not clamped.
    """
    seconds = abs(raw) // MICROSECONDS_PER_SECOND
    if raw < 0:
        seconds = -seconds
    return seconds - WEBKIT_EPOCH_OFFSET_SECONDS


def unix_to_webkit(seconds: int) -> int:
    return (seconds + WEBKIT_EPOCH_OFFSET_SECONDS) * MICROSECONDS_PER_SECOND


def format_utc(unix_time: int) -> str:
    try:
        dt = datetime.fromtimestamp(unix_time, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return INVALID_TIME
    return dt.strftime(UTC_FORMAT)


def decode_url(value: object) -> str:
    """Decode URL text as stored by the browser (UTF-8) into a str.

    Missing values and bytes that are not valid UTF-8 both come back as "".
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError:
            return ""
    return str(value)


def parse_reference_time(raw: str) -> int:
    """Parse a user-supplied reference time into Unix seconds.

    Accepts plain epoch seconds or anything dateutil understands; naive values are UTC.
    """
    stripped = raw.strip()
    if stripped.lstrip("-").isdigit():
        return int(stripped)
    try:
        parsed: Any = parser.parse(stripped)
    except (parser.ParserError, OverflowError) as exc:
        raise ValueError(f"Unable to parse timestamp: {raw!r}") from exc
    dt = cast(datetime, parsed)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp())


def coerce_str(value: object | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def ensure_mapping(value: object, *, context: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"Expected mapping for {context}.")
    return cast(dict[str, Any], value)


def ensure_list(value: object, *, context: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"Expected list for {context}.")
    return [cast(Any, item) for item in cast(list[object], value)]
