"""Tests for the backup, migrate and seed command scripts (usage errors, exit codes, output)."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest
from pymongo.errors import OperationFailure

import scripts.backup as backup_script
import scripts.migrate as migrate_script
import scripts.seed_sample_data as seed_script
from prehistoric_db.infrastructure.exceptions import StoreConnectionError
from prehistoric_db.infrastructure.services.migration_runner import MigrationRunner


def _patch_open_database(monkeypatch: pytest.MonkeyPatch, db) -> None:
    @asynccontextmanager
    async def fake_open_database(settings=None):
        yield db

    monkeypatch.setattr(backup_script, "open_database", fake_open_database)


class TestBackupScript:
    @pytest.mark.asyncio
    async def test_restore_without_path_is_usage_error(self, settings_env, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            await backup_script.main(["restore"])
        assert exc_info.value.code == 1
        assert "backup path" in capsys.readouterr().err

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arg", ["abc", "0", "-2"])
    async def test_clean_with_invalid_count_exits_1(self, settings_env, arg) -> None:
        with pytest.raises(SystemExit) as exc_info:
            await backup_script.main(["clean", arg])
        assert exc_info.value.code == 1

    @pytest.mark.asyncio
    async def test_unknown_command_prints_usage(self, settings_env, capsys) -> None:
        await backup_script.main([])
        assert "Usage:" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_list_without_backups(self, settings_env, capsys) -> None:
        await backup_script.main(["list"])
        assert "No backups found" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_backup_then_list_then_restore(
        self, settings_env, fake_db, monkeypatch, capsys, backup_dir
    ) -> None:
        await fake_db["tribes"].insert_many([{"name": "Bassa"}, {"name": "Kpelle"}])
        _patch_open_database(monkeypatch, fake_db)

        await backup_script.main(["backup"])
        out = capsys.readouterr().out
        assert "Total documents backed up: 2" in out
        snapshots = list(backup_dir.iterdir())
        assert len(snapshots) == 1

        await backup_script.main(["list"])
        assert "2 documents in 6 collections" in capsys.readouterr().out

        await fake_db["tribes"].insert_one({"name": "Extra"})
        await backup_script.main(["restore", str(snapshots[0])])
        assert "tribes: 2 documents restored" in capsys.readouterr().out
        assert await fake_db["tribes"].count_documents({}) == 2

    @pytest.mark.asyncio
    async def test_restore_missing_snapshot_exits_1(
        self, settings_env, fake_db, monkeypatch, tmp_path, capsys
    ) -> None:
        _patch_open_database(monkeypatch, fake_db)
        with pytest.raises(SystemExit) as exc_info:
            await backup_script.main(["restore", str(tmp_path / "nope")])
        assert exc_info.value.code == 1
        assert "Snapshot not found" in capsys.readouterr().err

    @pytest.mark.asyncio
    @pytest.mark.parametrize("command", ["backup", "list"])
    async def test_unwritable_backup_dir_exits_1(
        self, settings_env, fake_db, monkeypatch, backup_dir, capsys, command
    ) -> None:
        backup_dir.write_text("not a directory")
        _patch_open_database(monkeypatch, fake_db)

        with pytest.raises(SystemExit) as exc_info:
            await backup_script.main([command])

        assert exc_info.value.code == 1
        assert "Operation failed" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_clean_default_keeps_five(self, settings_env, backup_dir) -> None:
        backup_dir.mkdir(parents=True)
        for i in range(7):
            (backup_dir / f"backup-2024-01-0{i + 1}T00-00-00-000Z").mkdir()
        await backup_script.main(["clean"])
        assert len(list(backup_dir.iterdir())) == 5


class TestMigrateScript:
    @pytest.mark.asyncio
    async def test_unreachable_store_exits_1(self, settings_env, monkeypatch, capsys) -> None:
        async def unreachable(settings=None):
            raise StoreConnectionError("mongodb://localhost:27017/prehistoric_vr", "timed out")

        monkeypatch.setattr(migrate_script, "run_migration", unreachable)

        with pytest.raises(SystemExit) as exc_info:
            await migrate_script.main()
        assert exc_info.value.code == 1
        assert "Migration failed" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_success_prints_summary(
        self, settings_env, fake_db, monkeypatch, capsys
    ) -> None:
        async def migrate(settings=None):
            return await MigrationRunner(fake_db, settings).run()

        monkeypatch.setattr(migrate_script, "run_migration", migrate)

        await migrate_script.main()

        out = capsys.readouterr().out
        assert "Collections: 6 (6 created" in out
        assert "Admin user: created" in out
        assert "completed successfully" in out


class TestSeedScript:
    @pytest.mark.asyncio
    async def test_store_error_on_one_collection_is_reported(
        self, settings_env, fake_db, monkeypatch, capsys
    ) -> None:
        @asynccontextmanager
        async def fake_open_database(settings=None):
            yield fake_db

        monkeypatch.setattr(seed_script, "open_database", fake_open_database)
        fake_db["tribes"].insert_many = AsyncMock(side_effect=OperationFailure("write failed"))

        await seed_script.main()

        captured = capsys.readouterr()
        assert "failed tribes: write failed" in captured.err
        assert "completed with errors" in captured.out

    @pytest.mark.asyncio
    async def test_unreachable_store_exits_1(self, settings_env, monkeypatch) -> None:
        @asynccontextmanager
        async def unreachable(settings=None):
            raise StoreConnectionError("mongodb://localhost:27017/prehistoric_vr", "timed out")
            yield

        monkeypatch.setattr(seed_script, "open_database", unreachable)

        with pytest.raises(SystemExit) as exc_info:
            await seed_script.main()
        assert exc_info.value.code == 1
