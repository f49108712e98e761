"""
VRCX Companion API — Feed Service (Data Access)
================================================

What:  Recent-activity feed backed by `gamelog_events`.
Who:   GET /api/feed/recent (read); the game-log importer (record_event).

Limit policy:
    The requested limit is clamped into [1, 500]; a missing or non-numeric
    value means 50. Out-of-range values are adjusted silently, never rejected.
    The clamped value is still sent as a bound parameter, not spliced into
    the SQL text.

Uniqueness:
    record_event() inserts with ON CONFLICT (created_at, data) DO NOTHING, so
    replaying the same log line is a no-op instead of a duplicate row.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vrcx_api.database import dialect_insert
from vrcx_api.exceptions import StorageError
from vrcx_api.models.gamelog import GamelogEvent

logger = logging.getLogger(__name__)

DEFAULT_FEED_LIMIT = 50
MIN_FEED_LIMIT = 1
MAX_FEED_LIMIT = 500


def clamp_feed_limit(raw: Any = None) -> int:
    """
    Normalize a requested feed limit.

    >>> clamp_feed_limit(None), clamp_feed_limit("abc"), clamp_feed_limit("9999"), clamp_feed_limit(0)
    (50, 50, 500, 1)
    """
    if raw is None:
        return DEFAULT_FEED_LIMIT
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_FEED_LIMIT
    return max(MIN_FEED_LIMIT, min(MAX_FEED_LIMIT, value))


class FeedService:
    """Data access for game log events."""

    async def list_recent_feed(
        self,
        db: AsyncSession,
        limit: Optional[Any] = None,
    ) -> List[GamelogEvent]:
        """
        Newest events first (by surrogate key), at most clamp(limit) rows.

        Fewer rows than the limit are returned as-is; the result is never padded.
        """
        effective_limit = clamp_feed_limit(limit)
        try:
            result = await db.execute(
                select(GamelogEvent)
                .order_by(desc(GamelogEvent.id))
                .limit(effective_limit)
            )
            return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error listing feed (limit=%d): %s", effective_limit, str(e))
            raise StorageError(
                operation="list recent feed",
                context={"limit": effective_limit, "error_type": type(e).__name__},
            ) from e

    async def record_event(self, db: AsyncSession, created_at: str, data: str) -> bool:
        """
        Store one game log event unless the same (created_at, data) already exists.

        Returns:
            True if a row was inserted, False if it was a duplicate.
        """
        try:
            stmt = (
                dialect_insert(db, GamelogEvent.__table__)
                .values(created_at=created_at, data=data)
                .on_conflict_do_nothing(index_elements=["created_at", "data"])
            )
            result = await db.execute(stmt)
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error recording feed event at %s: %s", created_at, str(e))
            raise StorageError(
                operation="record feed event",
                context={"created_at": created_at, "error_type": type(e).__name__},
            ) from e

        inserted = result.rowcount == 1
        if not inserted:
            logger.debug("Duplicate feed event ignored (created_at=%s)", created_at)
        return inserted


feed_service = FeedService()
