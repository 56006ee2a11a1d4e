"""Infrastructure exceptions for store and snapshot operations.

Store errors extend PrehistoricDBException so the scripts can report
them the same way as validation failures.
"""

from prehistoric_db.domain.exceptions import PrehistoricDBException


class StoreException(PrehistoricDBException):
    """Base exception for document store operations."""


class StoreConnectionError(StoreException):
    """The store could not be reached (fatal for every command)."""

    def __init__(self, uri: str, reason: str) -> None:
        super().__init__(
            f"Could not connect to MongoDB at {uri}: {reason}",
            "STORE_UNREACHABLE",
            {"uri": uri, "reason": reason},
        )


class SnapshotNotFoundError(StoreException):
    """Snapshot directory passed to restore does not exist."""

    def __init__(self, snapshot_path: str) -> None:
        super().__init__(
            f"Snapshot not found: {snapshot_path}",
            "SNAPSHOT_NOT_FOUND",
            {"snapshot_path": snapshot_path},
        )
