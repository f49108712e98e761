"""
VRCX Companion API — Game Log Event Model
==========================================

What:  ORM model for the `gamelog_events` table backing the recent-activity feed.
Why:   The game-log importer may replay the same log file several times; the
       UNIQUE(created_at, data) constraint makes those replays harmless
       (see FeedService.record_event, which inserts with ON CONFLICT DO NOTHING).
"""

from sqlalchemy import Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vrcx_api.database import Base


class GamelogEvent(Base):
    __tablename__ = "gamelog_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)

    # Opaque payload, passed through to clients untouched
    data: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint("created_at", "data", name="uq_gamelog_events_created_at_data"),
    )

    def __repr__(self) -> str:
        return f"<GamelogEvent(id={self.id}, created_at='{self.created_at}')>"
