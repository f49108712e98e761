"""
ORM models, grouped by the route surface (deployment profile) that reads them.

Importing this package registers every table on `Base.metadata`.
"""

from typing import List

from sqlalchemy import Table

from vrcx_api.models.favorite import FavoriteAvatar, FavoriteWorld
from vrcx_api.models.gamelog import GamelogEvent
from vrcx_api.models.memo import Memo
from vrcx_api.models.user import User

LEGACY_TABLES = (
    Memo.__table__,
    FavoriteWorld.__table__,
    FavoriteAvatar.__table__,
    GamelogEvent.__table__,
)
V1_TABLES = (User.__table__,)


def tables_for_profile(app_settings) -> List[Table]:
    """Tables the active API profile needs at startup."""
    tables: List[Table] = []
    if app_settings.serves_legacy:
        tables.extend(LEGACY_TABLES)
    if app_settings.serves_v1:
        tables.extend(V1_TABLES)
    return tables


__all__ = [
    "FavoriteAvatar",
    "FavoriteWorld",
    "GamelogEvent",
    "Memo",
    "User",
    "tables_for_profile",
]
