"""
VRCX Companion API — Notes (Memo) Route Handlers
=================================================

What:  GET /api/notes (recent memos or one user's memo) and POST /api/notes (upsert).
How:   Extracts query/body, delegates to MemoService, returns JSON.
Who:   Called by the web frontend's notes page and by the MCP proxy.

Response shape:
    GET always answers with a JSON array, even in single-user mode
    (zero or one element), so clients only ever handle one shape.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from vrcx_api.database import get_db_session
from vrcx_api.schemas.memo import MemoResponse, MemoUpsertRequest
from vrcx_api.services.memo_service import memo_service

router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[MemoResponse],
    responses={500: {"description": "Storage failure (text/plain)"}},
    summary="List recent memos, or fetch one user's memo",
)
async def list_notes(
    user_id: Optional[str] = Query(
        default=None,
        description="If present, return only this user's memo (as a 0- or 1-element list)",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[MemoResponse]:
    """
    Two modes, switched by the presence of `user_id`:
        GET /api/notes               → up to 200 memos, most recently edited first
        GET /api/notes?user_id=usr_1 → [memo] or []
    """
    if user_id is not None:
        memo = await memo_service.get_memo_for_user(db, user_id)
        return [MemoResponse.model_validate(memo)] if memo else []

    memos = await memo_service.list_recent_memos(db)
    return [MemoResponse.model_validate(m) for m in memos]


@router.post(
    "/notes",
    status_code=204,
    response_class=Response,
    responses={
        204: {"description": "Memo stored"},
        400: {"description": "Body is not {user_id: string, memo: string}"},
        500: {"description": "Storage failure (text/plain)"},
    },
    summary="Create or overwrite a user's memo",
)
async def upsert_note(
    body: MemoUpsertRequest,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Upsert with a server-assigned edited_at.

    Malformed JSON or a body of the wrong shape never reaches this function:
    FastAPI raises RequestValidationError, which main.py maps to 400.
    """
    await memo_service.upsert_memo(db, body.user_id, body.memo)
    return Response(status_code=204)
