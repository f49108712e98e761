"""
VRCX Companion API — Favorite Service (Data Access)
====================================================

What:  Lists favorite worlds and avatars, newest first.
How:   Both kinds share one code path; the kind picks the model.

Query plan:
    SELECT id, created_at, <kind>_id, group_name FROM favorite_<kind>s
    ORDER BY id DESC LIMIT :limit
    → surrogate key order is insertion order, so this is "most recently added"
"""

import logging
from typing import Dict, List, Optional, Type, Union

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vrcx_api.exceptions import StorageError, ValidationError
from vrcx_api.models.favorite import FavoriteAvatar, FavoriteWorld
from vrcx_api.timestamps import utc_now_rfc3339

logger = logging.getLogger(__name__)

FAVORITES_LIMIT = 200

Favorite = Union[FavoriteWorld, FavoriteAvatar]

_MODELS: Dict[str, Type[Favorite]] = {
    "world": FavoriteWorld,
    "avatar": FavoriteAvatar,
}


class FavoriteService:
    """Data access for the two favorites lists."""

    def _model_for(self, kind: str) -> Type[Favorite]:
        try:
            return _MODELS[kind]
        except KeyError:
            raise ValidationError(
                message=f"Unknown favorite kind '{kind}'",
                field="kind",
                context={"allowed": sorted(_MODELS)},
            ) from None

    async def list_favorites(
        self,
        db: AsyncSession,
        kind: str,
        limit: int = FAVORITES_LIMIT,
    ) -> List[Favorite]:
        """
        List favorites of one kind, highest surrogate key first.

        Args:
            kind: "world" or "avatar"
            limit: maximum number of rows (default 200)

        Raises:
            ValidationError: unknown kind
            StorageError: query failed
        """
        model = self._model_for(kind)
        try:
            result = await db.execute(
                select(model).order_by(desc(model.id)).limit(limit)
            )
            return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error listing favorite %ss: %s", kind, str(e))
            raise StorageError(
                operation=f"list favorite {kind}s",
                context={"error_type": type(e).__name__},
            ) from e

    async def add_favorite(
        self,
        db: AsyncSession,
        kind: str,
        item_id: str,
        group_name: Optional[str] = None,
        created_at: Optional[str] = None,
    ) -> Favorite:
        """
        Append a favorite row (writer side; no HTTP route exposes this).

        No dedup: favoriting the same item twice yields two rows.
        """
        model = self._model_for(kind)
        id_field = "world_id" if model is FavoriteWorld else "avatar_id"
        row = model(
            created_at=created_at or utc_now_rfc3339(),
            group_name=group_name,
            **{id_field: item_id},
        )
        try:
            db.add(row)
            await db.flush()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error adding favorite %s %s: %s", kind, item_id, str(e))
            raise StorageError(
                operation=f"add favorite {kind}",
                context={"item_id": item_id, "error_type": type(e).__name__},
            ) from e
        return row


favorite_service = FavoriteService()
