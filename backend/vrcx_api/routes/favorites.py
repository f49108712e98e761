"""
VRCX Companion API — Favorites Route Handlers
==============================================

What:  GET /api/favorites/worlds and GET /api/favorites/avatars.
How:   Up to 200 items each, most recently added first. Read-only.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vrcx_api.database import get_db_session
from vrcx_api.schemas.favorite import FavoriteItem
from vrcx_api.services.favorite_service import favorite_service

router = APIRouter(prefix="/api/favorites", tags=["Favorites"])


async def _list(db: AsyncSession, kind: str) -> List[FavoriteItem]:
    rows = await favorite_service.list_favorites(db, kind)
    return [FavoriteItem.model_validate(row) for row in rows]


@router.get(
    "/worlds",
    response_model=List[FavoriteItem],
    responses={500: {"description": "Storage failure (text/plain)"}},
    summary="List favorite worlds, newest first",
)
async def list_favorite_worlds(
    db: AsyncSession = Depends(get_db_session),
) -> List[FavoriteItem]:
    return await _list(db, "world")


@router.get(
    "/avatars",
    response_model=List[FavoriteItem],
    responses={500: {"description": "Storage failure (text/plain)"}},
    summary="List favorite avatars, newest first",
)
async def list_favorite_avatars(
    db: AsyncSession = Depends(get_db_session),
) -> List[FavoriteItem]:
    return await _list(db, "avatar")
