"""
FastAPI dependencies.

Everything here reads from ``app.state``, which the application lifespan
fills in; routes never touch globals.

Usage:
    from fastapi import Depends
    from mdb_crud.api.dependencies import get_user_service

    @router.get("/users/me")
    async def me(users: UserService = Depends(get_user_service)):
        ...
"""

import logging
from typing import Any

from fastapi import HTTPException, Request

from ..config import Settings
from ..observability.logging import set_crud_context
from ..schemas.user import USER_COLLECTION
from ..services.user import UserService

logger = logging.getLogger(__name__)


async def get_settings(request: Request) -> Settings:
    """Get the application settings from app state."""
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise HTTPException(503, "Settings not configured")
    return settings


async def get_mongo_client(request: Request) -> Any | None:
    """Get the shared Mongo client (None before startup completes)."""
    return getattr(request.app.state, "mongo_client", None)


async def get_db(request: Request) -> Any:
    """Get the configured Motor database."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise HTTPException(503, "Database not initialized")
    return db


async def get_user_service(request: Request) -> UserService:
    """Get a UserService bound to the users collection."""
    db = await get_db(request)
    set_crud_context(USER_COLLECTION)
    return UserService(db[USER_COLLECTION])


async def get_current_user_email(request: Request) -> str:
    """
    Email of the authenticated user.

    An authentication middleware is expected to have stored the user on
    ``request.state.user``; without one every ``/me`` route answers 401.
    """
    user = getattr(request.state, "user", None)
    email = user.get("email") if isinstance(user, dict) else getattr(user, "email", None)
    if not email:
        raise HTTPException(401, "Authentication required")
    return email
