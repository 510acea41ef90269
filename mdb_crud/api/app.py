"""
Application factory.

Usage:
    uvicorn mdb_crud.api.app:create_app --factory

    # or, with explicit settings
    app = create_app(Settings(mongo_uri="mongodb://localhost:27017", db_name="app"))
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..config import Settings
from ..database.connection import (
    close_shared_client,
    get_shared_mongo_client,
    verify_shared_client,
)
from .errors import register_exception_handlers
from .middleware import CorrelationIdMiddleware
from .routes import health_router, users_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings (read from the environment when omitted)

    Raises:
        ConfigurationError: If the settings are invalid
    """
    settings = settings or Settings()
    settings.validate()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = get_shared_mongo_client(settings)
        app.state.mongo_client = client
        app.state.db = client[settings.db_name]
        if not await verify_shared_client():
            logger.warning("MongoDB did not answer ping at startup; continuing")
        logger.info(f"Application started ({settings!r})")
        try:
            yield
        finally:
            close_shared_client()
            app.state.mongo_client = None
            app.state.db = None

    app = FastAPI(
        title="MDB CRUD REST API",
        description="Generic document CRUD over MongoDB",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(CorrelationIdMiddleware)
    register_exception_handlers(app, settings)

    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(users_router, prefix=settings.api_prefix)

    return app
