"""
User service.

Composes the generic CRUD layer for the ``users`` collection and adds the
user-specific queries the routes need.
"""

import logging
from typing import Any

from ..crud import GenericCrudService
from ..schemas.user import User, UserPopulate, UserProtection

logger = logging.getLogger(__name__)


class UserService:
    """
    Data access for users.

    Generic operations are available on ``records``::

        users = UserService(db["users"])
        await users.records.archive_one(conditions={"_id": user_id})
    """

    def __init__(self, collection: Any):
        self.records: GenericCrudService[User] = GenericCrudService(collection, User)

    async def find_by_email(
        self,
        email: str,
        projection: dict[str, Any] | None = None,
        ignore_archived: bool = False,
    ) -> dict[str, Any] | None:
        return await self.records.find_one(
            conditions={"email": email},
            projection=UserProtection.DEFAULT() if projection is None else projection,
            populate=UserPopulate.DEFAULT() or None,
            options={},
            ignore_archived=ignore_archived,
        )

    async def update_by_email(
        self,
        email: str,
        changes: dict[str, Any],
        projection: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """
        Apply ``changes`` to the active user with ``email`` and return the result.

        The user is resolved to its ``_id`` first, so the read-back still finds
        it when ``changes`` replaces the email itself.
        """
        if not changes:
            logger.debug(f"No changes submitted for user {email}; returning current state")
            return await self.find_by_email(email, projection=projection)

        current = await self.find_by_email(email, projection={"_id": 1})
        if current is None:
            return None
        return await self.records.update_one(
            conditions={"_id": current["_id"]},
            changes=changes,
            projection=UserProtection.DEFAULT() if projection is None else projection,
            populate=UserPopulate.DEFAULT() or None,
            options={},
        )
