"""
VRCX Companion API — User Service (Data Access)
================================================

What:  Lists users for GET /v1/users, ordered by name.

Failure policy (deliberately different from every other service):
    Any storage failure is logged and turned into an empty list instead of a
    StorageError. Clients of /v1/users therefore cannot tell "no users" from
    "database down". This mirrors the behavior the endpoint has always had;
    whether it should surface a 500 like the rest is an open product question,
    so it is kept as-is.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vrcx_api.models.user import User

logger = logging.getLogger(__name__)


class UserService:

    async def list_users(self, db: AsyncSession) -> List[User]:
        """All users ordered by name; [] if the query fails."""
        try:
            result = await db.execute(select(User).order_by(User.name))
            return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            logger.warning(
                "Listing users failed, returning empty list: %s (%s)",
                str(e),
                type(e).__name__,
            )
            return []


user_service = UserService()
