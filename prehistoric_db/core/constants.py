"""Core constants: collection names and snapshot format literals.

MongoDB has no DDL. Collections are created by the migration (or implicitly
on first write). Use these constants so collection names stay consistent
across the migration, the backup tool and the seeder.
"""

COLLECTION_USERS = "users"
COLLECTION_TRIBES = "tribes"
COLLECTION_ARTIFACTS = "artifacts"
COLLECTION_VR_EXPERIENCES = "vrexperiences"
COLLECTION_AI_CONVERSATIONS = "aiconversations"
COLLECTION_CONFIG = "config"

# Order matters: backups export and restores import in this order.
MANAGED_COLLECTIONS: tuple[str, ...] = (
    COLLECTION_USERS,
    COLLECTION_TRIBES,
    COLLECTION_ARTIFACTS,
    COLLECTION_VR_EXPERIENCES,
    COLLECTION_AI_CONVERSATIONS,
    COLLECTION_CONFIG,
)

# Singleton config document identity
APP_CONFIG_ID = "app_config"

# Snapshot layout
SNAPSHOT_PREFIX = "backup-"
SNAPSHOT_METADATA_FILE = "metadata.json"
SNAPSHOT_FORMAT_VERSION = "1.0.0"
