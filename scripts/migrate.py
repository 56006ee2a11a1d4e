"""Provision the database: collections, indexes, config document, admin account.

Usage:
    uv run python -m scripts.migrate
Safe to re-run. Connects to MONGODB_URI (default mongodb://localhost:27017/prehistoric_vr).
Exits 1 if the database is unreachable.
"""

import asyncio
import sys

from prehistoric_db.core.config import get_settings
from prehistoric_db.domain.reports import MigrationReport
from prehistoric_db.infrastructure.exceptions import StoreConnectionError
from prehistoric_db.infrastructure.services.migration_runner import run_migration
from prehistoric_db.shared.telemetry.logging import setup_logging


def print_report(report: MigrationReport) -> None:
    """Print the operator summary for one migration run."""
    print(f"Database: {report.database}")
    print(
        f"Collections: {report.collection_count} "
        f"({len(report.collections_created)} created, "
        f"{len(report.collections_existing)} already present, "
        f"{len(report.collections_failed)} failed)"
    )
    print(f"Indexes: {report.indexes_declared} declared, {len(report.indexes_failed)} failed")
    print(f"Config document: {'upserted' if report.config_upserted else 'NOT upserted'}")
    print(f"Admin user: {'created' if report.admin_created else 'unchanged'}")
    for name, count in report.document_counts.items():
        print(f"  {name}: {count} documents")
    for item, error in {
        **report.collections_failed,
        **report.indexes_failed,
        **report.step_errors,
    }.items():
        print(f"  failed {item}: {error}", file=sys.stderr)


async def main() -> None:
    """Run the migration against the configured database."""
    settings = get_settings()
    setup_logging()
    try:
        report = await run_migration(settings)
    except StoreConnectionError as e:
        print(f"Migration failed: {e.message}", file=sys.stderr)
        print(
            "Make sure MongoDB is running and MONGODB_URI points at it.",
            file=sys.stderr,
        )
        sys.exit(1)
    print_report(report)
    if report.succeeded:
        print("Database migration completed successfully")
    else:
        print("Database migration completed with errors (see above)")


if __name__ == "__main__":
    asyncio.run(main())
