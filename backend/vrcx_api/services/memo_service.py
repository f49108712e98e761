"""
VRCX Companion API — Memo Service (Data Access)
================================================

What:  Reads and writes per-user memos in the `memos` table.
Who:   Called by the /api/notes route handlers.
How:   One parameterized statement per call against the request's session.

Write semantics (upsert_memo):
    INSERT INTO memos (user_id, edited_at, memo) VALUES (:user_id, :now, :memo)
    ON CONFLICT (user_id) DO UPDATE
        SET edited_at = excluded.edited_at, memo = excluded.memo

    A single statement, so two concurrent writes for the same user can never
    merge: the stored row is exactly one of the submitted values. There is no
    read-then-write window.

Error Handling Strategy:
    Driver and pool failures are wrapped in StorageError carrying the
    operation name; the global handler turns that into a 500.
"""

import logging
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vrcx_api.database import dialect_insert
from vrcx_api.exceptions import StorageError
from vrcx_api.models.memo import Memo
from vrcx_api.timestamps import utc_now_rfc3339

logger = logging.getLogger(__name__)

RECENT_MEMOS_LIMIT = 200


class MemoService:
    """
    Data access for memos.

    Responsibilities:
        - get_memo_for_user(): exact lookup by natural key
        - list_recent_memos(): newest edits first
        - upsert_memo(): atomic insert-or-overwrite with a server timestamp
    """

    async def get_memo_for_user(self, db: AsyncSession, user_id: str) -> Optional[Memo]:
        """
        Fetch the memo of one user, or None if the user has none.

        Query plan:
            SELECT user_id, edited_at, memo FROM memos WHERE user_id = :user_id
            → primary key lookup
        """
        try:
            result = await db.execute(select(Memo).where(Memo.user_id == user_id))
            return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error fetching memo for user %s: %s", user_id, str(e))
            raise StorageError(
                operation="get memo",
                context={"user_id": user_id, "error_type": type(e).__name__},
            ) from e

    async def list_recent_memos(
        self,
        db: AsyncSession,
        limit: int = RECENT_MEMOS_LIMIT,
    ) -> List[Memo]:
        """Most recently edited memos first, at most `limit` rows."""
        try:
            result = await db.execute(
                select(Memo).order_by(desc(Memo.edited_at)).limit(limit)
            )
            return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error listing memos: %s", str(e))
            raise StorageError(
                operation="list recent memos",
                context={"error_type": type(e).__name__},
            ) from e

    async def upsert_memo(self, db: AsyncSession, user_id: str, memo: str) -> str:
        """
        Write a user's memo, overwriting any existing one.

        What:    Sets edited_at to the current UTC time (RFC-3339) and stores memo.
        When:    POST /api/notes.
        Commit:  Committed before returning, so the 204 is only sent once the
                 write is durable.

        Returns:
            The edited_at value that was written.

        Raises:
            StorageError: statement or commit failed (nothing is persisted)
        """
        edited_at = utc_now_rfc3339()
        try:
            stmt = dialect_insert(db, Memo.__table__).values(
                user_id=user_id,
                edited_at=edited_at,
                memo=memo,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id"],
                set_={
                    "edited_at": stmt.excluded.edited_at,
                    "memo": stmt.excluded.memo,
                },
            )
            await db.execute(stmt)
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error upserting memo for user %s: %s", user_id, str(e))
            raise StorageError(
                operation="save memo",
                context={"user_id": user_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Memo saved for user %s (%d chars)", user_id, len(memo))
        return edited_at


memo_service = MemoService()
