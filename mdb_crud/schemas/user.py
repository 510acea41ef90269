"""
User record schema with its projection and population presets.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .system import System

USER_COLLECTION = "users"


class User(BaseModel):
    """Shape of a stored user; unknown fields are dropped on create."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    email: str | None = None
    system: System | None = None


class UserProtection:
    """Projections exposing only the fields a given audience may see."""

    @staticmethod
    def _default_protection() -> dict[str, Any]:
        return {
            "firstName": 1,
            "lastName": 1,
            "email": 1,
        }

    @classmethod
    def DEFAULT(cls) -> dict[str, Any]:
        return {**cls._default_protection()}

    @classmethod
    def ADMIN(cls) -> dict[str, Any]:
        return {**cls._default_protection(), "system": 1}


class UserPopulate:
    """
    Population presets for user reads.

    Users carry no references yet, so the default set is empty. A preset
    looks like ``[{"path": "studios", "collection": "studios", "select": {...}}]``.
    """

    @classmethod
    def DEFAULT(cls) -> list[dict[str, Any]]:
        return []
