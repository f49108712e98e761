"""
Favorite list item as returned by /api/favorites/worlds and /api/favorites/avatars.

`item_id` carries the world id or avatar id depending on the list.
"""

from typing import Optional

from pydantic import BaseModel, Field


class FavoriteItem(BaseModel):
    id: int = Field(description="Surrogate key; higher means more recently added")
    created_at: str = Field(description="When the favorite was added")
    item_id: str = Field(description="World or avatar identifier")
    group_name: Optional[str] = Field(default=None, description="Favorite group, if any")

    model_config = {"from_attributes": True}
