"""
VRCX Companion API — Application Package Initializer
=====================================================

What: Marks the `vrcx_api` directory as a Python package.
Why:  Enables module imports like `from vrcx_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is a thin CRUD layer over a relational database:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP handlers)       │  ← query/body shape, status codes
    ├─────────────────────────────────────┤
    │     Services (Data Access Layer)    │  ← one parameterized statement per call
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data)         │  ← SQLAlchemy tables + Pydantic wire shapes
    ├─────────────────────────────────────┤
    │     Database (Engine + Pool)        │  ← injected per application instance
    └─────────────────────────────────────┘

    Two route surfaces share this core: the flat legacy surface (`/api/*`,
    `/healthz`) and the versioned surface (`/v1/*`, `/health`). Which one is
    mounted is selected by the API_PROFILE setting.
"""

__version__ = "0.3.0"
