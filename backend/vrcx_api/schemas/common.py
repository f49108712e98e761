"""
VRCX Companion API — Health, Ping and User Schemas
===================================================

What:  Small response models for the probe endpoints and the /v1 users list.
"""

import uuid

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """GET /health (versioned surface): liveness only."""
    ok: bool = Field(default=True, description="Process is up")


class DetailedHealthResponse(HealthResponse):
    """GET /healthz (legacy surface): liveness plus version and server time."""
    version: str = Field(description="Application version")
    time: str = Field(description="Server time, RFC-3339 UTC ('' if unavailable)")


class PingResponse(BaseModel):
    pong: bool = Field(default=True)


class UserResponse(BaseModel):
    id: uuid.UUID = Field(description="User identifier")
    name: str = Field(description="Display name")

    model_config = {"from_attributes": True}
