"""
VRCX Companion API — Favorite World / Avatar Models
====================================================

What:  ORM models for the `favorite_worlds` and `favorite_avatars` tables.
Why:   Both lists have the same shape and are read newest-first by
       surrogate key. No dedup is enforced: the same world may be
       favorited twice (e.g. in two groups).
"""

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from vrcx_api.database import Base


class FavoriteWorld(Base):
    __tablename__ = "favorite_worlds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    world_id: Mapped[str] = mapped_column(Text, nullable=False)
    group_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @property
    def item_id(self) -> str:
        return self.world_id

    def __repr__(self) -> str:
        return f"<FavoriteWorld(id={self.id}, world_id='{self.world_id}')>"


class FavoriteAvatar(Base):
    __tablename__ = "favorite_avatars"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    avatar_id: Mapped[str] = mapped_column(Text, nullable=False)
    group_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @property
    def item_id(self) -> str:
        return self.avatar_id

    def __repr__(self) -> str:
        return f"<FavoriteAvatar(id={self.id}, avatar_id='{self.avatar_id}')>"
