"""MongoDB connection lifecycle (motor async driver).

Every command opens exactly one client through open_database(), which
verifies the server is reachable before yielding and always closes the
client on the way out, including on error paths.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from urllib.parse import urlsplit, urlunsplit

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from prehistoric_db.core.config import Settings, get_settings
from prehistoric_db.infrastructure.exceptions import StoreConnectionError

logger = logging.getLogger(__name__)


def redact_uri(uri: str) -> str:
    """Return the connection string with any password replaced by ***."""
    parts = urlsplit(uri)
    if not parts.password:
        return uri
    userinfo, _, hosts = parts.netloc.rpartition("@")
    user = userinfo.partition(":")[0]
    return urlunsplit(parts._replace(netloc=f"{user}:***@{hosts}"))


@asynccontextmanager
async def open_database(
    settings: Settings | None = None,
) -> AsyncIterator[AsyncIOMotorDatabase]:
    """Connect, ping, and yield the configured database.

    The database is the one named in MONGODB_URI, or settings.mongodb_database
    when the URI names none.

    Raises:
        StoreConnectionError: If the URI is invalid or no server answers the
            ping within the server selection timeout.
    """
    settings = settings or get_settings()
    safe_uri = redact_uri(settings.mongodb_uri)
    client: AsyncIOMotorClient | None = None
    try:
        client = AsyncIOMotorClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
        )
        await client.admin.command("ping")
    except PyMongoError as e:
        if client is not None:
            client.close()
        logger.error("MongoDB unreachable at %s: %s", safe_uri, e)
        raise StoreConnectionError(safe_uri, str(e)) from e

    db = client.get_default_database(default=settings.mongodb_database)
    logger.info("Connected to MongoDB database %s at %s", db.name, safe_uri)
    try:
        yield db
    finally:
        client.close()
        logger.info("MongoDB connection closed")
