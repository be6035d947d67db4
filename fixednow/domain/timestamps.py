"""ISO-8601 (UTC, ``Z`` suffix) conversions to and from epoch milliseconds."""

import re
from datetime import datetime, timedelta, timezone

DEFAULT_NOW = "2000-01-01T00:00:00Z"

ISO8601Z_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# fixed-width fields, optional fraction of up to nanosecond precision
ISO8601Z_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d{1,9}))?Z")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class InvalidTimestamp(ValueError):
    """Raised when a string is not a ``YYYY-MM-DDTHH:MM:SS[.fff]Z`` timestamp."""


def parse_iso8601z(text: str) -> int:
    """Return the epoch milliseconds of ``text``; sub-millisecond digits are truncated."""
    match = ISO8601Z_PATTERN.fullmatch(text) if isinstance(text, str) else None
    if match is None:
        raise InvalidTimestamp(f"Not an ISO-8601 UTC timestamp: {text!r}")
    whole, fraction = match.groups()
    try:
        parsed = datetime.strptime(whole + "Z", ISO8601Z_FORMAT)
    except ValueError as exc:
        raise InvalidTimestamp(f"Not an ISO-8601 UTC timestamp: {text!r}") from exc
    millis = int((fraction or "").ljust(3, "0")[:3])
    return to_epoch_millis(parsed.replace(tzinfo=timezone.utc)) + millis


def to_iso8601z(epoch_millis: int) -> str:
    instant = from_epoch_millis(epoch_millis)
    if instant.microsecond:
        return instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{instant.microsecond // 1000:03d}Z"
    return instant.strftime(ISO8601Z_FORMAT)


def to_epoch_millis(instant: datetime) -> int:
    return (instant - EPOCH) // timedelta(milliseconds=1)


def from_epoch_millis(epoch_millis: int) -> datetime:
    return EPOCH + timedelta(milliseconds=epoch_millis)
