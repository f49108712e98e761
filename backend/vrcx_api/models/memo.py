"""
VRCX Companion API — Memo SQLAlchemy Model
===========================================

What:  ORM model for the `memos` table: one free-text memo per user.
Who:   Used by MemoService for lookup, listing and upsert.

Table Design Rationale:
    - user_id is the natural primary key: at most one memo per user, and the
      upsert's ON CONFLICT target.
    - edited_at is stored as RFC-3339 TEXT (fixed microsecond precision, UTC),
      so lexical order equals chronological order for "recent memos".
"""

from sqlalchemy import Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from vrcx_api.database import Base


class Memo(Base):
    """A user's memo; overwritten in place on every write (last write wins)."""

    __tablename__ = "memos"

    user_id: Mapped[str] = mapped_column(
        Text,
        primary_key=True,
        comment="Opaque user identifier (natural key)",
    )

    edited_at: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="RFC-3339 UTC timestamp of the last write",
    )

    memo: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Memo text",
    )

    __table_args__ = (
        Index("idx_memos_edited_at", edited_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Memo(user_id='{self.user_id}', edited_at='{self.edited_at}')>"
