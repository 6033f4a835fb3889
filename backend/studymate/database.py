"""
StudyMate Backend — Database Client Management
================================================

What:  Async PyMongo client, database handle accessor, and lifecycle helpers.
Why:   Centralizes all database connection logic in one place.
How:   Lazily creates a single AsyncMongoClient per process, exposes the
       configured database to the repository dependencies, and closes the
       client on shutdown.
Who:   Used by repository dependencies and the application lifespan.
When:  Client is created on first use; database handles are resolved per-request.

Architecture Decision:
    We use PyMongo's native asyncio client (AsyncMongoClient) because:
    1. Non-blocking I/O — a slow query doesn't block other requests
    2. Natural fit with FastAPI's async request handling
    3. The driver owns connection pooling; we hold no locks of our own

Stable API:
    The client pins MongoDB Stable API version "1" with strict=False and
    deprecation_errors=False so commands outside the stable set still run.
"""

import logging
from typing import Any, Dict, Optional

from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from studymate.config import settings

logger = logging.getLogger(__name__)

_client: Optional[AsyncMongoClient] = None


# ── Client Factory ────────────────────────────────────────────────────────
def get_client() -> AsyncMongoClient:
    """
    Return the process-wide client, creating it on first call.

    Why lazy: mongodb+srv URIs resolve DNS when the client is built; deferring
    construction keeps imports side-effect free (tests never build a client).
    """
    global _client
    if _client is None:
        _client = AsyncMongoClient(
            settings.mongodb_url,
            server_api=ServerApi("1", strict=False, deprecation_errors=False),
            serverSelectionTimeoutMS=settings.db_timeout_ms,
            tz_aware=True,
        )
    return _client


# ── Database Handle ───────────────────────────────────────────────────────
def get_database() -> AsyncDatabase:
    """
    Return the application database handle.

    Example usage:
        async def get_partner_repository():
            return PartnerRepository(get_database()[settings.partners_collection])
    """
    return get_client()[settings.db_name]


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def ping_database() -> Dict[str, Any]:
    """Round-trip a ping command; raises PyMongoError when unreachable."""
    return await get_client().admin.command("ping")


async def ensure_indexes() -> None:
    """
    Create the secondary indexes the list queries rely on.

    Failure is logged and swallowed: the service keeps answering requests
    (and returning 500s) instead of refusing to start.
    """
    db = get_database()
    try:
        await db[settings.partners_collection].create_index([("subject", ASCENDING)])
        await db[settings.partners_collection].create_index([("experience", ASCENDING)])
        await db[settings.partner_requests_collection].create_index(
            [("requestedBy", ASCENDING)]
        )
        logger.info("MongoDB connected, indexes ensured on '%s'", settings.db_name)
    except PyMongoError as e:
        logger.error("MongoDB connection failed: %s", str(e))


async def close_client() -> None:
    """
    What:  Closes the client and all pooled connections.
    When:  Called during application shutdown (lifespan handler).
    """
    global _client
    if _client is not None:
        await _client.close()
        _client = None
