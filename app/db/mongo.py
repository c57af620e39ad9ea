"""
app/db/mongo.py

Purpose: Motor client lifecycle for the mongo storage backend

- One process-wide client, opened at startup and closed at shutdown
- Startup retries with exponential backoff
- Ping-based health probe
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError
from typing import Optional
import asyncio
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

CONNECT_ATTEMPTS = 3
FIRST_RETRY_DELAY = 2

_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None


def _open_client(url: str) -> AsyncIOMotorClient:
    return AsyncIOMotorClient(
        url,
        maxPoolSize=50,
        minPoolSize=5,
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=10000,
        retryWrites=True,
        retryReads=True,
        tz_aware=True,
    )


async def connect_to_mongo(url: Optional[str] = None, db_name: Optional[str] = None) -> AsyncIOMotorDatabase:
    """
    Opens the shared client and returns the QuickTech database.

    Args:
        url: Connection string; defaults to settings.MONGODB_URL
        db_name: Database name; defaults to settings.MONGODB_DB_NAME

    Raises:
        ConnectionError: When every attempt fails to reach the server
    """
    global _client, _database

    if _database is not None:
        logger.warning("MongoDB client already open, reusing it")
        return _database

    url = url or settings.MONGODB_URL
    db_name = db_name or settings.MONGODB_DB_NAME
    delay = FIRST_RETRY_DELAY

    for attempt in range(1, CONNECT_ATTEMPTS + 1):
        client = _open_client(url)
        try:
            await client.admin.command("ping")
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            client.close()
            logger.error(f"MongoDB unreachable (attempt {attempt}/{CONNECT_ATTEMPTS}): {e}")

            if attempt == CONNECT_ATTEMPTS:
                raise ConnectionError("Could not establish MongoDB connection") from e

            await asyncio.sleep(delay)
            delay *= 2
            continue

        _client = client
        _database = client[db_name]
        logger.info(f"Connected to MongoDB database '{db_name}'")
        return _database


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
    Pings the server. False when the client is closed or the ping fails.
    """
    if _client is None:
        return False

    try:
        await _client.admin.command("ping")
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
    return True
