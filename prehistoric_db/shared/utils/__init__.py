"""Shared utilities: datetime helpers."""

from prehistoric_db.shared.utils.datetime import (
    filesystem_safe_timestamp,
    from_timestamp_utc,
    utc_now,
)

__all__ = [
    "filesystem_safe_timestamp",
    "from_timestamp_utc",
    "utc_now",
]
