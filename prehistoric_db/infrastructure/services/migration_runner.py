"""Database provisioning: collections, indexes, config document, admin account.

The migration is safe to re-run. Existing collections and indexes are left
as they are, the admin account is only ever inserted, and the config
document is replaced with the values declared in code on every run.
A failure on one collection, index or singleton is logged and the run
moves on; nothing is rolled back.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import CollectionInvalid, OperationFailure, PyMongoError

from prehistoric_db.core.config import Settings, get_settings
from prehistoric_db.core.constants import (
    APP_CONFIG_ID,
    COLLECTION_CONFIG,
    COLLECTION_USERS,
    MANAGED_COLLECTIONS,
)
from prehistoric_db.domain.reports import MigrationReport
from prehistoric_db.infrastructure.mongo.client import open_database
from prehistoric_db.infrastructure.mongo.indexes import REQUIRED_INDEXES, IndexSpec
from prehistoric_db.infrastructure.mongo.seed_data import (
    build_admin_user,
    build_app_config,
)
from prehistoric_db.infrastructure.security.password import get_password_hash
from prehistoric_db.shared.telemetry.logging import get_logger
from prehistoric_db.shared.utils.datetime import utc_now

logger = get_logger(__name__)

# Server error code for "collection already exists"
NAMESPACE_EXISTS = 48


def _is_namespace_exists(exc: PyMongoError) -> bool:
    if isinstance(exc, CollectionInvalid):
        return True
    return isinstance(exc, OperationFailure) and exc.code == NAMESPACE_EXISTS


class MigrationRunner:
    """Brings a database from any state to the fully provisioned state."""

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        settings: Settings | None = None,
        app_config: dict[str, Any] | None = None,
        collections: Sequence[str] = MANAGED_COLLECTIONS,
        indexes: Sequence[IndexSpec] = REQUIRED_INDEXES,
    ) -> None:
        """Initialize the runner.

        Args:
            db: Open database handle; the caller owns the connection.
            settings: Settings for the admin credential; defaults to get_settings().
            app_config: Config document values (without _id and timestamps);
                defaults to APP_CONFIG_VALUES.
            collections: Collections to create.
            indexes: Indexes to declare.
        """
        self._db = db
        self._settings = settings or get_settings()
        self._app_config = app_config
        self._collections = tuple(collections)
        self._indexes = tuple(indexes)

    async def run(self) -> MigrationReport:
        """Run every provisioning step in order and return a summary."""
        report = MigrationReport(database=self._db.name)
        await self.create_collections(report)
        await self.create_indexes(report)
        await self.upsert_app_config(report)
        await self.ensure_admin_user(report)
        report.document_counts = await self.count_documents()
        if report.succeeded:
            logger.info("Migration of %s completed successfully", report.database)
        else:
            logger.warning("Migration of %s completed with errors", report.database)
        return report

    async def create_collections(self, report: MigrationReport) -> None:
        for name in self._collections:
            try:
                await self._db.create_collection(name)
            except PyMongoError as e:
                if _is_namespace_exists(e):
                    logger.info("Collection already exists: %s", name)
                    report.collections_existing.append(name)
                else:
                    logger.error("Error creating collection %s: %s", name, e)
                    report.collections_failed[name] = str(e)
                continue
            logger.info("Created collection: %s", name)
            report.collections_created.append(name)

    async def create_indexes(self, report: MigrationReport) -> None:
        """Declare every index; re-declaring an identical index is a server no-op."""
        for spec in self._indexes:
            options: dict[str, Any] = {"unique": True} if spec.unique else {}
            try:
                await self._db[spec.collection].create_index(list(spec.keys), **options)
            except PyMongoError as e:
                logger.error("Error creating index %s: %s", spec.label, e)
                report.indexes_failed[spec.label] = str(e)
                continue
            report.indexes_declared += 1
        logger.info(
            "Declared %d indexes (%d failed)",
            report.indexes_declared,
            len(report.indexes_failed),
        )

    async def upsert_app_config(self, report: MigrationReport) -> None:
        """Replace the singleton config document, inserting it if absent."""
        doc = build_app_config(utc_now(), self._app_config)
        try:
            await self._db[COLLECTION_CONFIG].replace_one(
                {"_id": APP_CONFIG_ID}, doc, upsert=True
            )
        except PyMongoError as e:
            logger.error("Error upserting %s: %s", APP_CONFIG_ID, e)
            report.step_errors["config"] = str(e)
            return
        report.config_upserted = True
        logger.info("Application configuration upserted")

    async def ensure_admin_user(self, report: MigrationReport) -> None:
        """Insert the admin account unless one with the reserved email exists.

        The existence check avoids hashing on every run; the insert itself is
        an upsert with $setOnInsert so a concurrent run cannot create a
        duplicate or overwrite an account created in between.
        """
        email = self._settings.admin_email
        users = self._db[COLLECTION_USERS]
        try:
            if await users.find_one({"email": email}, projection={"_id": 1}):
                logger.info("Admin user already exists")
                return
            password_hash = get_password_hash(
                self._settings.admin_password.get_secret_value(),
                rounds=self._settings.bcrypt_rounds,
            )
            doc = build_admin_user(email, password_hash, utc_now())
            doc.pop("email")
            result = await users.update_one(
                {"email": email}, {"$setOnInsert": doc}, upsert=True
            )
        except PyMongoError as e:
            logger.error("Error provisioning admin user %s: %s", email, e)
            report.step_errors["admin"] = str(e)
            return
        report.admin_created = result.upserted_id is not None
        if report.admin_created:
            logger.info("Admin user created: %s", email)
        else:
            logger.info("Admin user already exists")

    async def count_documents(self) -> dict[str, int]:
        """Document count per managed collection (collections that error are omitted)."""
        counts: dict[str, int] = {}
        for name in self._collections:
            try:
                counts[name] = await self._db[name].count_documents({})
            except PyMongoError as e:
                logger.warning("Could not count documents in %s: %s", name, e)
        return counts


async def run_migration(settings: Settings | None = None) -> MigrationReport:
    """Open the configured store, run the migration, and close the connection.

    Raises:
        StoreConnectionError: If the store is unreachable.
    """
    settings = settings or get_settings()
    async with open_database(settings) as db:
        return await MigrationRunner(db, settings).run()
