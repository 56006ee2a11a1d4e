"""Sample content for development databases.

Seeds a few tribes, artifacts and one VR experience. Each collection is only
seeded when it is empty, so running against a populated database changes
nothing. Artifacts and VR experiences reference tribes by _id and are
skipped when the referenced tribes are missing.
"""

from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from prehistoric_db.core.constants import (
    COLLECTION_ARTIFACTS,
    COLLECTION_TRIBES,
    COLLECTION_VR_EXPERIENCES,
)
from prehistoric_db.domain.reports import SeedReport
from prehistoric_db.infrastructure.mongo.seed_data import (
    build_sample_artifacts,
    build_sample_tribes,
    build_sample_vr_experiences,
)
from prehistoric_db.shared.telemetry.logging import get_logger
from prehistoric_db.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class SampleDataSeeder:
    """Inserts sample tribes, artifacts and VR experiences into empty collections."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._db = db

    async def seed(self) -> SeedReport:
        """Seed each collection in turn; a store error on one is logged and skipped."""
        steps = (
            (COLLECTION_TRIBES, self.seed_tribes),
            (COLLECTION_ARTIFACTS, self.seed_artifacts),
            (COLLECTION_VR_EXPERIENCES, self.seed_vr_experiences),
        )
        inserted: dict[str, int] = {}
        failed: dict[str, str] = {}
        for name, step in steps:
            try:
                inserted[name] = await step()
            except PyMongoError as e:
                logger.error("Error seeding %s: %s", name, e)
                inserted[name] = 0
                failed[name] = str(e)
        return SeedReport(inserted=inserted, failed=failed)

    async def _existing_count(self, name: str) -> int:
        count = await self._db[name].count_documents({})
        if count:
            logger.info("%s collection already has %d documents", name, count)
        return count

    async def seed_tribes(self) -> int:
        if await self._existing_count(COLLECTION_TRIBES):
            return 0
        tribes = build_sample_tribes(utc_now())
        await self._db[COLLECTION_TRIBES].insert_many(tribes)
        logger.info("Inserted %d sample tribes", len(tribes))
        return len(tribes)

    async def seed_artifacts(self) -> int:
        if await self._existing_count(COLLECTION_ARTIFACTS):
            return 0
        tribes = self._db[COLLECTION_TRIBES]
        bassa = await tribes.find_one({"name": "Bassa"})
        kpelle = await tribes.find_one({"name": "Kpelle"})
        if not bassa or not kpelle:
            logger.warning("Could not create artifacts: Bassa/Kpelle tribes not found")
            return 0
        artifacts = build_sample_artifacts(bassa["_id"], kpelle["_id"], utc_now())
        await self._db[COLLECTION_ARTIFACTS].insert_many(artifacts)
        logger.info("Inserted %d sample artifacts", len(artifacts))
        return len(artifacts)

    async def seed_vr_experiences(self) -> int:
        if await self._existing_count(COLLECTION_VR_EXPERIENCES):
            return 0
        bassa = await self._db[COLLECTION_TRIBES].find_one({"name": "Bassa"})
        if not bassa:
            logger.warning("Could not create VR experiences: Bassa tribe not found")
            return 0
        experiences = build_sample_vr_experiences(bassa["_id"], utc_now())
        await self._db[COLLECTION_VR_EXPERIENCES].insert_many(experiences)
        logger.info("Inserted %d sample VR experiences", len(experiences))
        return len(experiences)
