"""
VRCX Companion API — Health Check Routes
=========================================

What:  Liveness probes for container orchestration and the web frontend.
Why:   Two surfaces, two probe shapes:
         GET /health   (versioned surface) → {"ok": true}
         GET /healthz  (legacy surface)    → {"ok": true, "version": ..., "time": ...}
How:   Pure process liveness; neither probe touches the database, so they
       never fail while the process is able to answer HTTP at all.
"""

from fastapi import APIRouter

from vrcx_api import __version__
from vrcx_api.schemas.common import DetailedHealthResponse, HealthResponse
from vrcx_api.timestamps import utc_now_rfc3339

router = APIRouter(tags=["Health"])
legacy_router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def health() -> HealthResponse:
    return HealthResponse(ok=True)


@legacy_router.get(
    "/healthz",
    response_model=DetailedHealthResponse,
    summary="Liveness probe with version and server time",
    description=(
        "Reports that the process is up, which build is running and the server's "
        "current UTC time (RFC-3339). If the time cannot be formatted it is sent as "
        "an empty string rather than failing the probe."
    ),
)
async def healthz() -> DetailedHealthResponse:
    return DetailedHealthResponse(
        ok=True,
        version=__version__,
        time=utc_now_rfc3339(),
    )
