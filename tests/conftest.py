"""Pytest configuration and fixtures for the database tooling.

Unit tests run against tests.fakes.FakeDatabase and a tmp_path snapshot
root. Integration tests need a real MongoDB: set TEST_MONGODB_URI (without a
database name, e.g. mongodb://localhost:27017/) and run with -m requires_db.
All imports use prehistoric_db.*.
"""

import os
import uuid
from pathlib import Path

import pytest

from prehistoric_db.core.config import Settings, get_settings
from prehistoric_db.infrastructure.services.backup_manager import BackupManager
from tests.fakes import FakeDatabase


@pytest.fixture
def fake_db() -> FakeDatabase:
    """Empty in-memory database."""
    return FakeDatabase()


@pytest.fixture
def settings() -> Settings:
    """Settings with the defaults (admin credential, bcrypt cost 10)."""
    return Settings(_env_file=None)


@pytest.fixture
def backup_dir(tmp_path: Path) -> Path:
    return tmp_path / "backups"


@pytest.fixture
def backup_manager(backup_dir: Path) -> BackupManager:
    return BackupManager(backup_dir)


@pytest.fixture
def settings_env(monkeypatch: pytest.MonkeyPatch, backup_dir: Path):
    """Point get_settings() at a temp backup dir; cache is cleared around the test."""
    monkeypatch.setenv("BACKUP_DIR", str(backup_dir))
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def mongodb_settings() -> Settings:
    """Settings for a throwaway database on a real server.

    Skips when TEST_MONGODB_URI is not set.
    """
    uri = os.environ.get("TEST_MONGODB_URI")
    if not uri:
        pytest.skip("MongoDB not configured: set TEST_MONGODB_URI to run integration tests")
    return Settings(
        _env_file=None,
        mongodb_uri=uri,
        mongodb_database=f"prehistoric_vr_test_{uuid.uuid4().hex[:12]}",
    )
