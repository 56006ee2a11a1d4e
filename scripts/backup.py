"""Back up, restore, list and prune JSON snapshots of the database.

Usage:
    uv run python -m scripts.backup backup            Create a backup, then keep the newest BACKUP_KEEP_COUNT
    uv run python -m scripts.backup restore <path>    Restore from a backup directory
    uv run python -m scripts.backup list              List available backups
    uv run python -m scripts.backup clean [count]     Delete old backups (keep 5 by default)
Snapshots are written under BACKUP_DIR (default ./backups).
"""

import asyncio
import sys

from prehistoric_db.core.config import Settings, get_settings
from prehistoric_db.domain.exceptions import PrehistoricDBException
from prehistoric_db.infrastructure.mongo.client import open_database
from prehistoric_db.infrastructure.services.backup_manager import BackupManager
from prehistoric_db.shared.telemetry.logging import setup_logging

DEFAULT_KEEP_COUNT = 5

USAGE = """Database backup utility

Usage:
  python -m scripts.backup backup            Create a new backup
  python -m scripts.backup restore <path>    Restore from backup
  python -m scripts.backup list              List available backups
  python -m scripts.backup clean [count]     Clean old backups (keep 5 by default)

Examples:
  python -m scripts.backup restore ./backups/backup-2024-01-15T10-30-00-000Z
  python -m scripts.backup clean 3"""


def _usage_error(message: str) -> None:
    print(message, file=sys.stderr)
    print(USAGE, file=sys.stderr)
    sys.exit(1)


async def _backup(manager: BackupManager, settings: Settings) -> None:
    async with open_database(settings) as db:
        path = await manager.backup(db)
    metadata = await manager.read_metadata(path)
    if metadata is not None:
        print(f"Total documents backed up: {metadata.total_documents}")
        for summary in metadata.collections:
            if summary.error:
                print(f"  {summary.name}: FAILED ({summary.error})", file=sys.stderr)
    print(f"Backup location: {path}")
    deleted = await manager.clean_old_backups(settings.backup_keep_count)
    for name in deleted:
        print(f"Deleted old backup: {name}")


async def _restore(manager: BackupManager, settings: Settings, snapshot_path: str) -> None:
    async with open_database(settings) as db:
        result = await manager.restore(db, snapshot_path)
    for name, count in result.restored.items():
        print(f"  {name}: {count} documents restored")
    for name in result.skipped:
        print(f"  {name}: skipped")
    for name, error in result.failed.items():
        print(f"  {name}: FAILED ({error})", file=sys.stderr)
    print(f"Restore completed: {result.total_restored} documents")


async def _list(manager: BackupManager) -> None:
    snapshots = await manager.list_backups()
    print("Available backups:")
    if not snapshots:
        print("   No backups found")
        return
    for snapshot in snapshots:
        line = f"   {snapshot.name} ({snapshot.created_at.isoformat()})"
        if snapshot.documents is not None:
            line += f" - {snapshot.documents} documents in {snapshot.collections} collections"
        print(line)


async def _clean(manager: BackupManager, keep_count: int) -> None:
    deleted = await manager.clean_old_backups(keep_count)
    for name in deleted:
        print(f"Deleted old backup: {name}")
    print(f"Backup cleanup completed ({len(deleted)} deleted)")


async def main(argv: list[str] | None = None) -> None:
    """Dispatch the subcommand named in argv (defaults to sys.argv[1:])."""
    args = sys.argv[1:] if argv is None else argv
    command = args[0] if args else None

    settings = get_settings()
    setup_logging()
    manager = BackupManager(settings.backup_dir)

    try:
        if command == "backup":
            await _backup(manager, settings)
        elif command == "restore":
            if len(args) < 2:
                _usage_error("Please provide the backup path: restore <backup-path>")
            await _restore(manager, settings, args[1])
        elif command == "list":
            await _list(manager)
        elif command == "clean":
            keep_count = DEFAULT_KEEP_COUNT
            if len(args) > 1:
                try:
                    keep_count = int(args[1])
                except ValueError:
                    _usage_error(f"Keep count must be an integer, got: {args[1]!r}")
            await _clean(manager, keep_count)
        else:
            print(USAGE)
    except PrehistoricDBException as e:
        print(f"Operation failed: {e.message}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Operation failed: {e}", file=sys.stderr)
        print(f"Check that BACKUP_DIR ({settings.backup_dir}) is writable.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
