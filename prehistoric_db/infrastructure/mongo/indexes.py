"""Index declarations for the managed collections.

Each IndexSpec maps onto one create_index() call. MongoDB treats a repeated
declaration with identical keys and options as a no-op, which is what makes
the migration safe to re-run.
"""

from dataclasses import dataclass

from pymongo import ASCENDING, DESCENDING, TEXT

from prehistoric_db.core.constants import (
    COLLECTION_AI_CONVERSATIONS,
    COLLECTION_ARTIFACTS,
    COLLECTION_TRIBES,
    COLLECTION_USERS,
    COLLECTION_VR_EXPERIENCES,
)


@dataclass(frozen=True)
class IndexSpec:
    """One index on one collection."""

    collection: str
    keys: tuple[tuple[str, int | str], ...]
    unique: bool = False

    @property
    def label(self) -> str:
        """Server-style default name, prefixed with the collection (for logs)."""
        name = "_".join(f"{field}_{direction}" for field, direction in self.keys)
        return f"{self.collection}.{name}"


def _text(collection: str, *fields: str) -> IndexSpec:
    return IndexSpec(collection, tuple((f, TEXT) for f in fields))


REQUIRED_INDEXES: tuple[IndexSpec, ...] = (
    # Users
    IndexSpec(COLLECTION_USERS, (("email", ASCENDING),), unique=True),
    IndexSpec(COLLECTION_USERS, (("tribe", ASCENDING),)),
    IndexSpec(COLLECTION_USERS, (("onboardingCompleted", ASCENDING),)),
    IndexSpec(COLLECTION_USERS, (("createdAt", DESCENDING),)),
    # Tribes
    IndexSpec(COLLECTION_TRIBES, (("name", ASCENDING),), unique=True),
    IndexSpec(COLLECTION_TRIBES, (("counties", ASCENDING),)),
    IndexSpec(COLLECTION_TRIBES, (("featured", DESCENDING), ("viewCount", DESCENDING))),
    IndexSpec(
        COLLECTION_TRIBES,
        (("coordinates.latitude", ASCENDING), ("coordinates.longitude", ASCENDING)),
    ),
    # Artifacts
    IndexSpec(COLLECTION_ARTIFACTS, (("tribe", ASCENDING), ("category", ASCENDING))),
    IndexSpec(COLLECTION_ARTIFACTS, (("featured", DESCENDING), ("viewCount", DESCENDING))),
    IndexSpec(COLLECTION_ARTIFACTS, (("tags", ASCENDING),)),
    IndexSpec(COLLECTION_ARTIFACTS, (("discovery.location.county", ASCENDING),)),
    IndexSpec(COLLECTION_ARTIFACTS, (("culturalPeriod", ASCENDING),)),
    # VR experiences
    IndexSpec(COLLECTION_VR_EXPERIENCES, (("category", ASCENDING), ("tribe", ASCENDING))),
    IndexSpec(
        COLLECTION_VR_EXPERIENCES,
        (("featured", DESCENDING), ("analytics.totalViews", DESCENDING)),
    ),
    IndexSpec(COLLECTION_VR_EXPERIENCES, (("status", ASCENDING), ("visibility", ASCENDING))),
    IndexSpec(COLLECTION_VR_EXPERIENCES, (("difficulty", ASCENDING),)),
    # AI conversations
    IndexSpec(
        COLLECTION_AI_CONVERSATIONS, (("userId", ASCENDING), ("createdAt", DESCENDING))
    ),
    IndexSpec(COLLECTION_AI_CONVERSATIONS, (("topic", ASCENDING),)),
    # Full-text search (one text index per collection)
    _text(COLLECTION_TRIBES, "name", "displayName", "description", "history.origins"),
    _text(COLLECTION_ARTIFACTS, "name", "displayName", "description", "tags"),
    _text(COLLECTION_VR_EXPERIENCES, "title", "description", "educational.keyTopics"),
)
