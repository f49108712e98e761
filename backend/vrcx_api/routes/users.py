"""
VRCX Companion API — Versioned (/v1) Route Handlers
====================================================

What:  GET /v1/ping (sub-API liveness) and GET /v1/users (users by name).

/v1/users never answers with an error status: UserService degrades storage
failures to an empty list (see services/user_service.py for the rationale).
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vrcx_api.database import get_db_session
from vrcx_api.schemas.common import PingResponse, UserResponse
from vrcx_api.services.user_service import user_service

router = APIRouter(prefix="/v1", tags=["v1"])


@router.get("/ping", response_model=PingResponse, summary="Sub-API liveness probe")
async def ping() -> PingResponse:
    return PingResponse(pong=True)


@router.get(
    "/users",
    response_model=List[UserResponse],
    summary="List users ordered by name",
)
async def list_users(
    db: AsyncSession = Depends(get_db_session),
) -> List[UserResponse]:
    users = await user_service.list_users(db)
    return [UserResponse.model_validate(u) for u in users]
