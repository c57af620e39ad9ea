"""
app/db/provider.py

Purpose: Storage backend lifecycle

- Chooses the backend from STORAGE_BACKEND at startup
- Holds the process-wide Storage instance
- Closes backend resources on shutdown
"""

from typing import Optional

from app.core.config import settings
from app.core.logging import get_logger
from app.db.storage import Storage, MemStorage

logger = get_logger(__name__)

_storage: Optional[Storage] = None
_backend: Optional[str] = None


async def init_storage(backend: Optional[str] = None) -> Storage:
    """
    Creates the storage backend and makes it the active one.

    Args:
        backend: "memory" or "mongo"; defaults to settings.STORAGE_BACKEND

    Returns:
        The active Storage instance
    """
    global _storage, _backend

    backend = backend or settings.STORAGE_BACKEND

    if backend == "mongo":
        from app.db.mongo import connect_to_mongo
        from app.db.mongo_storage import MongoStorage
        from app.db.indexes import create_indexes

        database = await connect_to_mongo()
        await create_indexes(database)
        _storage = MongoStorage(database)
    else:
        _storage = MemStorage()

    _backend = backend

    logger.info(f"Storage initialized ({backend})")
    return _storage


async def close_storage():
    """
    Drops the active storage and closes any backend connection.
    """
    global _storage, _backend

    if _storage is None:
        return

    if _backend == "mongo":
        from app.db.mongo import close_mongo_connection
        await close_mongo_connection()

    await _storage.close()
    _storage = None
    _backend = None
    logger.info("Storage closed")


def get_storage() -> Storage:
    """
    Returns the active storage (usable as a FastAPI dependency).

    Raises:
        RuntimeError: If storage is not initialized
    """
    if _storage is None:
        raise RuntimeError(
            "Storage not initialized. Call init_storage() during startup."
        )
    return _storage


async def check_storage_health() -> bool:
    """
    True when the active backend can serve requests.
    """
    if _storage is None:
        return False

    if _backend == "mongo":
        from app.db.mongo import check_database_health
        return await check_database_health()

    return True
