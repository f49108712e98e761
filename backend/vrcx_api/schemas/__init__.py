# Schemas package init
"""
Pydantic request/response models: the JSON wire contract of every route.
Kept separate from the SQLAlchemy models so column names can differ from
field names (e.g. world_id/avatar_id → item_id).
"""
