"""
Unit tests for the shared MongoDB client.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from mdb_crud.database import connection


@pytest.fixture(autouse=True)
def reset_shared_client():
    connection._shared_client = None
    yield
    connection._shared_client = None


class TestGetSharedMongoClient:
    def test_creates_client_from_settings(self, settings):
        mock_client = MagicMock()

        with patch(
            "mdb_crud.database.connection.AsyncIOMotorClient", return_value=mock_client
        ) as client_cls:
            client = connection.get_shared_mongo_client(settings)

        assert client is mock_client
        args, kwargs = client_cls.call_args
        assert args == (settings.mongo_uri,)
        assert kwargs["maxPoolSize"] == settings.max_pool_size
        assert kwargs["minPoolSize"] == settings.min_pool_size
        assert kwargs["serverSelectionTimeoutMS"] == settings.server_selection_timeout_ms
        assert kwargs["retryWrites"] is True
        assert kwargs["retryReads"] is True
        assert kwargs["appname"] == "MDB_CRUD"

    def test_returns_same_instance(self, settings):
        with patch(
            "mdb_crud.database.connection.AsyncIOMotorClient", return_value=MagicMock()
        ) as client_cls:
            first = connection.get_shared_mongo_client(settings)
            second = connection.get_shared_mongo_client(settings)

        assert first is second
        client_cls.assert_called_once()

    def test_creation_error_propagates(self, settings):
        with patch(
            "mdb_crud.database.connection.AsyncIOMotorClient",
            side_effect=ValueError("bad uri"),
        ):
            with pytest.raises(ValueError):
                connection.get_shared_mongo_client(settings)

        assert connection._shared_client is None

    def test_get_database(self, settings):
        mock_client = MagicMock()

        with patch("mdb_crud.database.connection.AsyncIOMotorClient", return_value=mock_client):
            db = connection.get_database(settings)

        mock_client.__getitem__.assert_called_once_with("test_db")
        assert db is mock_client.__getitem__.return_value


class TestVerifyAndClose:
    @pytest.mark.asyncio
    async def test_verify_without_client(self):
        assert await connection.verify_shared_client() is False

    @pytest.mark.asyncio
    async def test_verify_ping_ok(self):
        client = MagicMock()
        client.admin.command = AsyncMock(return_value={"ok": 1})
        connection._shared_client = client

        assert await connection.verify_shared_client() is True

    @pytest.mark.asyncio
    async def test_verify_ping_fails(self):
        client = MagicMock()
        client.admin.command = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
        connection._shared_client = client

        assert await connection.verify_shared_client() is False

    def test_close(self):
        client = MagicMock()
        connection._shared_client = client

        connection.close_shared_client()

        client.close.assert_called_once()
        assert connection._shared_client is None

    def test_close_without_client(self):
        connection.close_shared_client()

        assert connection._shared_client is None
