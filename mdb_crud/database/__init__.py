"""
Database connection management.
"""

from .connection import (
    close_shared_client,
    get_database,
    get_shared_mongo_client,
    verify_shared_client,
)

__all__ = [
    "get_shared_mongo_client",
    "get_database",
    "verify_shared_client",
    "close_shared_client",
]
