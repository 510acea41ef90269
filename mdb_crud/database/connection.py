"""
Shared MongoDB client.

One ``AsyncIOMotorClient`` per process, created from ``Settings`` at
application start and closed at shutdown. Pooling, retryable reads and
retryable writes are the driver's job; nothing in the CRUD layer retries.

Usage:
    from mdb_crud.database import get_shared_mongo_client, close_shared_client

    client = get_shared_mongo_client(settings)
    db = client[settings.db_name]
"""

import logging
import threading

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import (
    ConnectionFailure,
    InvalidOperation,
    OperationFailure,
    ServerSelectionTimeoutError,
)

from ..config import Settings
from ..constants import DEFAULT_MAX_IDLE_TIME_MS

logger = logging.getLogger(__name__)

# Global singleton instance
_shared_client: AsyncIOMotorClient | None = None
_init_lock = threading.Lock()


def get_shared_mongo_client(
    settings: Settings,
    max_idle_time_ms: int = DEFAULT_MAX_IDLE_TIME_MS,
    retry_writes: bool = True,
    retry_reads: bool = True,
) -> AsyncIOMotorClient:
    """
    Gets or creates the shared MongoDB client.

    Args:
        settings: Validated application settings
        max_idle_time_ms: Maximum idle time before closing connections
        retry_writes: Enable automatic retry for write operations
        retry_reads: Enable automatic retry for read operations

    Returns:
        Shared AsyncIOMotorClient instance
    """
    global _shared_client

    if _shared_client is not None:
        return _shared_client

    with _init_lock:
        # Another thread may have initialized while we waited
        if _shared_client is not None:
            return _shared_client

        logger.info(
            f"Creating shared MongoDB client (max_pool_size={settings.max_pool_size}, "
            f"min_pool_size={settings.min_pool_size})"
        )
        try:
            _shared_client = AsyncIOMotorClient(
                settings.mongo_uri,
                serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
                appname="MDB_CRUD",
                maxPoolSize=settings.max_pool_size,
                minPoolSize=settings.min_pool_size,
                maxIdleTimeMS=max_idle_time_ms,
                retryWrites=retry_writes,
                retryReads=retry_reads,
            )
        except (ConnectionFailure, ServerSelectionTimeoutError, ValueError, TypeError) as e:
            logger.error(f"Failed to create shared MongoDB client: {e}", exc_info=True)
            _shared_client = None
            raise

    return _shared_client


def get_database(settings: Settings) -> AsyncIOMotorDatabase:
    """Return the configured database on the shared client."""
    return get_shared_mongo_client(settings)[settings.db_name]


async def verify_shared_client() -> bool:
    """
    Verifies that the shared MongoDB client is connected.

    Returns:
        True if client is connected and responsive, False otherwise
    """
    if _shared_client is None:
        logger.warning("Shared MongoDB client is None - cannot verify")
        return False

    try:
        await _shared_client.admin.command("ping")
        logger.debug("Shared MongoDB client verification successful")
        return True
    except (
        ConnectionFailure,
        ServerSelectionTimeoutError,
        OperationFailure,
        InvalidOperation,
    ) as e:
        logger.exception(f"Shared MongoDB client verification failed: {e}")
        return False


def close_shared_client() -> None:
    """
    Closes the shared MongoDB client.
    Should be called during application shutdown.
    """
    global _shared_client

    with _init_lock:
        if _shared_client is not None:
            _shared_client.close()
            logger.info("Shared MongoDB client closed")
        _shared_client = None
