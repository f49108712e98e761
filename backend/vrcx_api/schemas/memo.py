"""
VRCX Companion API — Memo Request/Response Schemas
===================================================

What:  Pydantic models defining the /api/notes wire contract.
Why:   FastAPI validates the POST body against MemoUpsertRequest (a failure
       becomes 400 via the global handler) and serializes MemoResponse lists.

Wire shape (consumed by the notes page of the web frontend):
    {"user_id": "usr_123", "edited_at": "2025-03-01T18:04:05.123456+00:00", "memo": "..."}
"""

from pydantic import BaseModel, Field


class MemoResponse(BaseModel):
    user_id: str = Field(description="Opaque user identifier")
    edited_at: str = Field(description="RFC-3339 UTC timestamp of the last write")
    memo: str = Field(description="Memo text")

    model_config = {"from_attributes": True}


class MemoUpsertRequest(BaseModel):
    """
    Body of POST /api/notes.

    Only `user_id` and `memo` are recognized; other fields are ignored.
    Both must be JSON strings (no coercion from numbers).
    """
    user_id: str = Field(description="User whose memo is written")
    memo: str = Field(description="New memo text; replaces any existing memo")

    model_config = {"extra": "ignore", "strict": True}
