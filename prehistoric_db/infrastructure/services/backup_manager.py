"""Backup, restore, listing and retention of JSON snapshots.

A snapshot is a directory ``<backup_dir>/backup-<timestamp>`` holding one
``<collection>.json`` array per managed collection plus ``metadata.json``.
Files are written through a temp file and renamed into place, so a crash
never leaves a half-written collection file behind.

Restore replaces each collection whose snapshot file holds a non-empty
array (delete_many then insert_many). Collections are restored one after
another with no cross-collection transaction.
"""

from __future__ import annotations

import asyncio
import os
import shutil
import tempfile
from collections.abc import Sequence
from os import stat_result
from pathlib import Path

import aiofiles
import aiofiles.os
from bson.errors import BSONError
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from prehistoric_db.core.constants import (
    MANAGED_COLLECTIONS,
    SNAPSHOT_METADATA_FILE,
    SNAPSHOT_PREFIX,
)
from prehistoric_db.domain.exceptions import ValidationException
from prehistoric_db.domain.snapshot import (
    CollectionSummary,
    RestoreResult,
    SnapshotInfo,
    SnapshotMetadata,
)
from prehistoric_db.infrastructure.exceptions import SnapshotNotFoundError
from prehistoric_db.infrastructure.mongo.json_codec import (
    dumps_documents,
    loads_documents,
)
from prehistoric_db.shared.telemetry.logging import get_logger
from prehistoric_db.shared.utils.datetime import (
    filesystem_safe_timestamp,
    from_timestamp_utc,
    utc_now,
)

logger = get_logger(__name__)


def _creation_time(st: stat_result) -> float:
    """Birth time where the platform records it, otherwise mtime."""
    birth = getattr(st, "st_birthtime", None)
    return birth if birth is not None else st.st_mtime


class BackupManager:
    """Exports and restores the managed collections as JSON snapshots.

    Example:
        >>> manager = BackupManager(settings.backup_dir)
        >>> async with open_database(settings) as db:
        ...     path = await manager.backup(db)
        >>> await manager.clean_old_backups(5)
    """

    def __init__(
        self,
        backup_dir: str | Path,
        collections: Sequence[str] = MANAGED_COLLECTIONS,
    ) -> None:
        """Initialize the manager.

        Args:
            backup_dir: Snapshot root; created on first use.
            collections: Collections to export/restore, in order.
        """
        self.backup_dir = Path(backup_dir)
        self.collections = tuple(collections)

    # Backup

    async def backup(self, db: AsyncIOMotorDatabase) -> Path:
        """Write a new snapshot of every managed collection.

        A collection that cannot be read or written is recorded in metadata
        with a zero count and its error; the other collections are still
        exported.

        Returns:
            Path of the new snapshot directory.
        """
        now = utc_now()
        snapshot_path = self.backup_dir / f"{SNAPSHOT_PREFIX}{filesystem_safe_timestamp(now)}"
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        snapshot_path.mkdir()
        logger.info("Creating backup at %s", snapshot_path)

        metadata = SnapshotMetadata(timestamp=now, database=db.name)
        for name in self.collections:
            metadata.add_collection(await self._backup_collection(db, name, snapshot_path))

        await self._write_atomic(
            snapshot_path / SNAPSHOT_METADATA_FILE, metadata.to_json().encode("utf-8")
        )
        logger.info(
            "Backup completed: %d documents in %d collections at %s",
            metadata.total_documents,
            len(metadata.collections),
            snapshot_path,
        )
        return snapshot_path

    async def _backup_collection(
        self, db: AsyncIOMotorDatabase, name: str, snapshot_path: Path
    ) -> CollectionSummary:
        try:
            documents = await db[name].find({}).to_list(None)
            payload = dumps_documents(documents).encode("utf-8")
            await self._write_atomic(snapshot_path / f"{name}.json", payload)
        except (PyMongoError, OSError, TypeError) as e:
            logger.warning("Could not back up collection %s: %s", name, e)
            return CollectionSummary(name=name, error=str(e))
        logger.info("Backed up %d documents from %s", len(documents), name)
        return CollectionSummary(
            name=name, document_count=len(documents), byte_size=len(payload)
        )

    @staticmethod
    async def _write_atomic(target: Path, data: bytes) -> None:
        """Write to a temp file in the same directory, then rename over target."""
        fd, temp_path = tempfile.mkstemp(dir=target.parent, prefix=".tmp_", suffix=target.suffix)
        os.close(fd)
        try:
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(data)
            await aiofiles.os.replace(temp_path, target)
        finally:
            if Path(temp_path).exists():
                await aiofiles.os.remove(temp_path)

    # Restore

    async def restore(
        self, db: AsyncIOMotorDatabase, snapshot_path: str | Path
    ) -> RestoreResult:
        """Replace the contents of each collection that has a non-empty snapshot file.

        Missing metadata, missing collection files and empty arrays are
        tolerated; a collection whose file is unreadable or whose insert
        fails is recorded in the result and the rest are still restored.

        Raises:
            SnapshotNotFoundError: If snapshot_path is not a directory.
        """
        path = Path(snapshot_path)
        if not path.is_dir():
            raise SnapshotNotFoundError(str(path))
        logger.info("Restoring from backup: %s", path)

        result = RestoreResult(snapshot_path=path)
        result.metadata = await self.read_metadata(path)
        if result.metadata is not None:
            logger.info(
                "Backup metadata loaded (%d total documents)",
                result.metadata.total_documents,
            )
        else:
            logger.warning("No metadata found in %s, proceeding with restore", path)

        for name in self.collections:
            collection_file = path / f"{name}.json"
            if not collection_file.exists():
                logger.warning("No backup file found for collection: %s", name)
                result.skipped.append(name)
                continue
            try:
                async with aiofiles.open(collection_file, encoding="utf-8") as f:
                    documents = loads_documents(await f.read())
                if not documents:
                    logger.info("Collection %s is empty in backup, skipping", name)
                    result.skipped.append(name)
                    continue
                collection = db[name]
                deleted = await collection.delete_many({})
                logger.info(
                    "Cleared %d existing documents in %s", deleted.deleted_count, name
                )
                await collection.insert_many(documents)
            except (OSError, ValueError, TypeError, BSONError, PyMongoError) as e:
                logger.error("Error restoring collection %s: %s", name, e)
                result.failed[name] = str(e)
                continue
            logger.info("Restored %d documents to %s", len(documents), name)
            result.restored[name] = len(documents)

        logger.info(
            "Restore completed: %d documents into %d collections (%d failed)",
            result.total_restored,
            len(result.restored),
            len(result.failed),
        )
        return result

    @staticmethod
    async def read_metadata(snapshot_path: Path) -> SnapshotMetadata | None:
        """Return parsed metadata.json, or None when missing or unreadable."""
        metadata_file = snapshot_path / SNAPSHOT_METADATA_FILE
        if not metadata_file.exists():
            return None
        try:
            async with aiofiles.open(metadata_file, encoding="utf-8") as f:
                return SnapshotMetadata.model_validate_json(await f.read())
        except (OSError, ValueError) as e:
            logger.warning("Unreadable metadata in %s: %s", snapshot_path, e)
            return None

    # Listing and retention

    async def list_backups(self) -> list[SnapshotInfo]:
        """Return every snapshot directory under the backup root, newest first.

        Entries that are not directories are ignored. Ties on creation time
        are broken by name, which encodes the capture timestamp.
        """
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        snapshots: list[SnapshotInfo] = []
        for entry in self.backup_dir.iterdir():
            if not entry.is_dir():
                continue
            st = await aiofiles.os.stat(entry)
            metadata = await self.read_metadata(entry)
            snapshots.append(
                SnapshotInfo(
                    name=entry.name,
                    path=entry,
                    created_at=from_timestamp_utc(_creation_time(st)),
                    documents=metadata.total_documents if metadata else None,
                    collections=len(metadata.collections) if metadata else None,
                )
            )
        snapshots.sort(key=lambda s: (s.created_at, s.name), reverse=True)
        return snapshots

    async def clean_old_backups(self, keep_count: int) -> list[str]:
        """Delete all but the keep_count most recently created snapshots.

        Returns:
            Names of the deleted snapshots (oldest last).

        Raises:
            ValidationException: If keep_count is not a positive integer.
        """
        if isinstance(keep_count, bool) or not isinstance(keep_count, int) or keep_count < 1:
            raise ValidationException(
                f"keep_count must be a positive integer, got {keep_count!r}",
                field="keep_count",
            )
        snapshots = await self.list_backups()
        if len(snapshots) <= keep_count:
            logger.info("Only %d backups found, no cleanup needed", len(snapshots))
            return []

        to_delete = snapshots[keep_count:]
        logger.info(
            "Cleaning up %d old backups (keeping %d most recent)", len(to_delete), keep_count
        )
        deleted: list[str] = []
        for snapshot in to_delete:
            try:
                await asyncio.to_thread(shutil.rmtree, snapshot.path)
            except OSError as e:
                logger.error("Could not delete backup %s: %s", snapshot.name, e)
                continue
            logger.info("Deleted old backup: %s", snapshot.name)
            deleted.append(snapshot.name)
        return deleted
