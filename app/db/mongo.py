"""
app/db/mongo.py

Purpose: MongoDB connection lifecycle

- One Motor client per process, opened in the app lifespan
- Connect retries with exponential backoff
- Timezone-aware datetimes on read (tz_aware=True)
- Collection accessors: accounts, services, clicks
"""

import asyncio
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection
from pymongo.errors import ConnectionFailure, PyMongoError, ServerSelectionTimeoutError

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

ACCOUNTS_COLLECTION = "accounts"
SERVICES_COLLECTION = "services"
CLICKS_COLLECTION = "clicks"

_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None


def _build_client() -> AsyncIOMotorClient:
    return AsyncIOMotorClient(
        settings.MONGODB_URL,
        maxPoolSize=settings.MONGODB_MAX_POOL_SIZE,
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=10000,
        retryWrites=True,
        retryReads=True,
        tz_aware=True,
    )


async def connect_to_mongo(retries: Optional[int] = None, retry_delay: float = 2.0):
    """
    Opens the process-wide client and pings the server.

    Raises:
        ConnectionError: If every attempt fails
    """
    global _client, _database

    if _client is not None:
        logger.warning("MongoDB client already initialized")
        return

    attempts = retries or settings.MONGODB_CONNECT_RETRIES
    for attempt in range(1, attempts + 1):
        client = _build_client()
        try:
            await client.admin.command("ping")
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            client.close()
            logger.error(f"MongoDB connection attempt {attempt}/{attempts} failed: {e}")
            if attempt == attempts:
                logger.critical("Giving up on MongoDB")
                raise ConnectionError("Could not establish MongoDB connection") from e
            await asyncio.sleep(retry_delay)
            retry_delay *= 2
            continue

        _client = client
        _database = client[settings.MONGODB_DB_NAME]
        logger.info(f"✅ Connected to MongoDB database '{settings.MONGODB_DB_NAME}'")
        return


async def close_mongo_connection():
    global _client, _database

    if _client is None:
        return
    _client.close()
    _client = None
    _database = None
    logger.info("MongoDB connection closed")


async def check_database_health() -> bool:
    """
    Pings the server; False when not connected or unreachable.
    """
    if _client is None:
        logger.warning("Health check before MongoDB connection was opened")
        return False

    loop = asyncio.get_running_loop()
    started = loop.time()
    try:
        await _client.admin.command("ping")
    except PyMongoError as e:
        logger.error(f"Database health check failed: {e}")
        return False

    logger.debug(f"MongoDB ping took {(loop.time() - started) * 1000:.1f} ms")
    return True


def get_database() -> AsyncIOMotorDatabase:
    """
    Raises:
        RuntimeError: If connect_to_mongo() has not run
    """
    if _database is None:
        raise RuntimeError("Database not initialized. Call connect_to_mongo() during startup.")
    return _database


def get_collection(name: str) -> AsyncIOMotorCollection:
    return get_database()[name]


def get_accounts_collection() -> AsyncIOMotorCollection:
    """
    One document per phone:
    phone (unique), pending_code, code_expires_at, verified,
    version (incremented on every write), created_at, updated_at
    """
    return get_collection(ACCOUNTS_COLLECTION)


def get_services_collection() -> AsyncIOMotorCollection:
    """Provider listings, soft-deleted via deleted/deleted_at."""
    return get_collection(SERVICES_COLLECTION)


def get_clicks_collection() -> AsyncIOMotorCollection:
    return get_collection(CLICKS_COLLECTION)
