"""MongoDB integration: connection lifecycle, index declarations, seed documents."""

from prehistoric_db.infrastructure.mongo.client import open_database, redact_uri

__all__ = [
    "open_database",
    "redact_uri",
]
