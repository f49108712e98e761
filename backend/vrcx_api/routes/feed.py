"""
VRCX Companion API — Feed Route Handler
========================================

What:  GET /api/feed/recent?limit=N — newest game log events first.

Why `limit` is taken as a raw string:
    A typed `int` query parameter would make FastAPI answer 422 for
    `?limit=abc`. The contract here is lenient instead: anything that is not
    an integer means "use the default (50)", and integers are clamped into
    [1, 500] without error. clamp_feed_limit() implements both rules.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vrcx_api.database import get_db_session
from vrcx_api.schemas.feed import FeedEntry
from vrcx_api.services.feed_service import feed_service

router = APIRouter(prefix="/api/feed", tags=["Feed"])


@router.get(
    "/recent",
    response_model=List[FeedEntry],
    responses={500: {"description": "Storage failure (text/plain)"}},
    summary="Recent game log events as [id, created_at, data] triples",
)
async def recent_feed(
    limit: Optional[str] = Query(
        default=None,
        description="Maximum number of events, clamped to 1..500 (default 50)",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[FeedEntry]:
    events = await feed_service.list_recent_feed(db, limit)
    return [(event.id, event.created_at, event.data) for event in events]
