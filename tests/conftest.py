"""
Pytest configuration and shared fixtures for MDB_CRUD tests.

This module provides:
- Mock Motor collection/database fixtures
- Cursor helpers for aggregate/find results
- Test data factories
"""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from mdb_crud.config import Settings

# ============================================================================
# HELPERS
# ============================================================================


def make_cursor(docs: list[dict[str, Any]] | None = None) -> MagicMock:
    """Cursor stand-in whose ``to_list`` resolves to ``docs``."""
    return MagicMock(to_list=AsyncMock(return_value=list(docs or [])))


def update_result(matched: int = 1, modified: int = 1, upserted_id: Any = None) -> MagicMock:
    return MagicMock(
        matched_count=matched,
        modified_count=modified,
        upserted_id=upserted_id,
        acknowledged=True,
    )


# ============================================================================
# MOCK MONGODB FIXTURES
# ============================================================================


@pytest.fixture
def inserted_id() -> ObjectId:
    return ObjectId("507f1f77bcf86cd799439011")


@pytest.fixture
def mock_database() -> MagicMock:
    """Mock Motor database; referenced collections are registered per test."""
    db = MagicMock()
    db.name = "test_db"
    db.collections = {}

    def get_collection(name: str) -> MagicMock:
        if name not in db.collections:
            collection = MagicMock()
            collection.name = name
            collection.find = MagicMock(return_value=make_cursor([]))
            db.collections[name] = collection
        return db.collections[name]

    db.__getitem__.side_effect = get_collection
    return db


@pytest.fixture
def mock_collection(mock_database: MagicMock, inserted_id: ObjectId) -> MagicMock:
    """Mock Motor collection with every method the CRUD layer calls."""
    collection = MagicMock()
    collection.name = "users"
    collection.database = mock_database
    collection.aggregate = MagicMock(return_value=make_cursor([]))
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=inserted_id))
    collection.update_one = AsyncMock(return_value=update_result())
    collection.update_many = AsyncMock(return_value=update_result(matched=2, modified=2))
    collection.find_one_and_delete = AsyncMock(return_value=None)
    collection.delete_many = AsyncMock(
        return_value=MagicMock(deleted_count=2, acknowledged=True)
    )
    return collection


# ============================================================================
# TEST DATA FACTORIES
# ============================================================================


@pytest.fixture
def user_doc(inserted_id: ObjectId) -> dict[str, Any]:
    """A stored, active user document as the driver would return it."""
    created = datetime(2024, 1, 1, 12, 0, 0)
    return {
        "_id": inserted_id,
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "system": {
            "createdAt": created,
            "modifiedAt": created,
            "archived": False,
        },
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="development",
        mongo_uri="mongodb://localhost:27017",
        db_name="test_db",
    )


@pytest.fixture
def production_settings() -> Settings:
    return Settings(
        environment="production",
        mongo_uri="mongodb://localhost:27017",
        db_name="test_db",
    )
