"""
UTC datetime utilities for consistent timezone handling.

All datetime values written to the store or to snapshots are timezone-aware
UTC. Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def from_timestamp_utc(timestamp: float) -> datetime:
    """
    Create a UTC-aware datetime from a Unix timestamp.
    Use instead of datetime.fromtimestamp() which returns naive local time.

    Args:
        timestamp: Unix timestamp (seconds since epoch)

    Returns:
        UTC-aware datetime
    """
    return datetime.fromtimestamp(timestamp, tz=UTC)


def filesystem_safe_timestamp(dt: datetime) -> str:
    """
    Render an ISO-8601 UTC instant with ':' and '.' replaced by '-'.

    Example: 2024-01-15T10:30:00.123Z -> 2024-01-15T10-30-00-123Z.
    Fixed width, so names built from it sort lexicographically by time.

    Args:
        dt: Aware datetime (converted to UTC) or naive datetime assumed UTC

    Returns:
        Timestamp string safe for use in a directory name
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(UTC)
    return f"{dt.strftime('%Y-%m-%dT%H-%M-%S')}-{dt.microsecond // 1000:03d}Z"
