"""
User routes.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from ...dtos.user import UpdateUserDto
from ...services.user import UserService
from ..dependencies import get_current_user_email, get_user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me",
    summary="Returns the logged in user.",
    responses={401: {"description": "Authentication required."}, 404: {"description": "Not found."}},
)
async def get_me(
    email: str = Depends(get_current_user_email),
    users: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    user = await users.find_by_email(email)
    if user is None:
        raise HTTPException(404, "User not found")
    return user


@router.put(
    "/me",
    summary="Update the logged in user.",
    responses={400: {"description": "Validation failed."}, 404: {"description": "Not found."}},
)
async def update_me(
    body: UpdateUserDto,
    email: str = Depends(get_current_user_email),
    users: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    user = await users.update_by_email(email, body.to_changes())
    if user is None:
        raise HTTPException(404, "User not found")
    return user
