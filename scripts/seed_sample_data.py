"""Seed sample tribes, artifacts and VR experiences for development.

Usage:
    uv run python -m scripts.seed_sample_data
Run after scripts.migrate. Only empty collections are seeded.
"""

import asyncio
import sys

from prehistoric_db.core.config import get_settings
from prehistoric_db.domain.exceptions import PrehistoricDBException
from prehistoric_db.infrastructure.mongo.client import open_database
from prehistoric_db.infrastructure.services.sample_data_seeder import SampleDataSeeder
from prehistoric_db.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Seed sample content into the configured database."""
    settings = get_settings()
    setup_logging()
    try:
        async with open_database(settings) as db:
            report = await SampleDataSeeder(db).seed()
    except PrehistoricDBException as e:
        print(f"Seeding failed: {e.message}", file=sys.stderr)
        sys.exit(1)
    for name, count in report.inserted.items():
        print(f"{name}: {count} sample documents inserted")
    for name, error in report.failed.items():
        print(f"  failed {name}: {error}", file=sys.stderr)
    print(f"Done. Total inserted: {report.total_inserted}")
    if not report.succeeded:
        print("Seeding completed with errors (see above)")


if __name__ == "__main__":
    asyncio.run(main())
