"""
VRCX Companion API — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test that touches storage gets its own SQLite file under
       tmp_path (aiosqlite driver), so tests never share rows and never
       need a running PostgreSQL.

Fixture Hierarchy (all function-scoped):
    ├── database:           Database on a fresh SQLite file, all tables created
    ├── db_session:         AsyncSession from that database
    ├── test_settings:      Settings with API_PROFILE=all
    ├── test_app:           FastAPI app wired to `database`
    ├── test_client:        HTTPX AsyncClient talking to `test_app`
    └── failing_db_session: Mock session whose every statement raises
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

# Before any vrcx_api import: the module-level app reads these
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_PROFILE"] = "all"

from vrcx_api import models  # noqa: E402,F401  registers all tables
from vrcx_api.config import Settings  # noqa: E402
from vrcx_api.database import Database  # noqa: E402
from vrcx_api.main import create_app  # noqa: E402


def sqlite_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'vrcx_test.db'}"


@pytest_asyncio.fixture
async def database(tmp_path):
    """A Database with every table created on an empty SQLite file."""
    db = Database(sqlite_url(tmp_path), pool_size=5)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        database_url=sqlite_url(tmp_path),
        api_profile="all",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def test_app(test_settings, database):
    return create_app(test_settings, database=database)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server, no lifespan;
    the `database` fixture has already created the schema).
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def make_operational_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


@pytest.fixture
def failing_db_session():
    """
    Mock AsyncSession simulating a database that went away mid-flight.

    get_bind() reports SQLite so dialect-specific statements can still be
    built; execute/commit/flush raise OperationalError.
    """
    session = AsyncMock()
    session.execute = AsyncMock(side_effect=make_operational_error())
    session.commit = AsyncMock(side_effect=make_operational_error())
    session.flush = AsyncMock(side_effect=make_operational_error())
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    bind = MagicMock()
    bind.dialect.name = "sqlite"
    session.get_bind = MagicMock(return_value=bind)
    return session
