"""
Unit tests for the application factory.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from mdb_crud.api.app import create_app
from mdb_crud.api.middleware import CorrelationIdMiddleware
from mdb_crud.config import Settings
from mdb_crud.exceptions import ConfigurationError


class TestCreateApp:
    def test_routes_mounted_under_prefix(self, settings):
        app = create_app(settings)

        paths = app.openapi()["paths"]
        assert "/api/check-connection" in paths
        assert "/api/users/me" in paths
        assert app.state.settings is settings

    def test_custom_prefix(self):
        settings = Settings(
            mongo_uri="mongodb://localhost:27017", db_name="test_db", api_prefix="/v1"
        )

        paths = create_app(settings).openapi()["paths"]

        assert "/v1/users/me" in paths

    def test_correlation_middleware_installed(self, settings):
        app = create_app(settings)

        assert any(m.cls is CorrelationIdMiddleware for m in app.user_middleware)

    def test_invalid_settings_rejected(self):
        with pytest.raises(ConfigurationError):
            create_app(Settings(mongo_uri="mongodb://localhost:27017", db_name="", environment="x"))


class TestLifespan:
    @pytest.mark.asyncio
    async def test_client_lifecycle(self, settings):
        client = MagicMock()
        app = create_app(settings)

        with patch("mdb_crud.api.app.get_shared_mongo_client", return_value=client), patch(
            "mdb_crud.api.app.verify_shared_client", AsyncMock(return_value=True)
        ), patch("mdb_crud.api.app.close_shared_client") as close:
            async with app.router.lifespan_context(app):
                assert app.state.mongo_client is client
                assert app.state.db is client.__getitem__.return_value
                client.__getitem__.assert_called_once_with("test_db")
                close.assert_not_called()

        close.assert_called_once()
        assert app.state.db is None
