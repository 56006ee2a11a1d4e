"""Integration tests against a real MongoDB server (requires TEST_MONGODB_URI)."""

import pytest

from prehistoric_db.core.constants import MANAGED_COLLECTIONS
from prehistoric_db.infrastructure.mongo.client import open_database
from prehistoric_db.infrastructure.services.backup_manager import BackupManager
from prehistoric_db.infrastructure.services.migration_runner import MigrationRunner
from prehistoric_db.infrastructure.services.sample_data_seeder import SampleDataSeeder

pytestmark = pytest.mark.requires_db


@pytest.mark.asyncio
async def test_migrate_seed_backup_restore_clean(mongodb_settings, tmp_path) -> None:
    async with open_database(mongodb_settings) as db:
        try:
            first = await MigrationRunner(db, mongodb_settings).run()
            second = await MigrationRunner(db, mongodb_settings).run()

            assert first.succeeded and second.succeeded
            assert first.admin_created is True
            assert second.admin_created is False
            assert second.collections_existing == list(MANAGED_COLLECTIONS)
            assert set(MANAGED_COLLECTIONS) <= set(await db.list_collection_names())
            users_indexes = await db["users"].index_information()
            assert any(
                info.get("unique") and info["key"] == [("email", 1)]
                for info in users_indexes.values()
            )

            seeded = await SampleDataSeeder(db).seed()
            assert seeded.inserted["tribes"] == 3

            manager = BackupManager(tmp_path / "backups")
            path = await manager.backup(db)
            metadata = await manager.read_metadata(path)
            assert metadata is not None
            assert metadata.total_documents == sum(
                [await db[name].count_documents({}) for name in MANAGED_COLLECTIONS]
            )

            await db["tribes"].insert_one({"name": "Transient"})
            result = await manager.restore(db, path)
            assert result.failed == {}
            assert await db["tribes"].count_documents({}) == 3
            assert await db["tribes"].find_one({"name": "Transient"}) is None

            listed = await manager.list_backups()
            assert [s.path for s in listed] == [path]
            assert await manager.clean_old_backups(1) == []
        finally:
            await db.client.drop_database(db.name)
