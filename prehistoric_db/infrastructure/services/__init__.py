"""Infrastructure services: migration, backup/restore, sample data."""

from prehistoric_db.infrastructure.services.backup_manager import BackupManager
from prehistoric_db.infrastructure.services.migration_runner import (
    MigrationRunner,
    run_migration,
)
from prehistoric_db.infrastructure.services.sample_data_seeder import SampleDataSeeder

__all__ = [
    "BackupManager",
    "MigrationRunner",
    "SampleDataSeeder",
    "run_migration",
]
