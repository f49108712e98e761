"""
VRCX Companion API — Database Engine & Session Management
==========================================================

What:  Async SQLAlchemy engine wrapper, declarative base, session dependency.
Why:   Centralizes all connection logic in one place.
How:   A `Database` object owns one async engine (and therefore one bounded
       connection pool). The app factory stores it on `app.state`; each
       request gets its own session through `get_db_session`.
Who:   Created by main.lifespan (or by tests), consumed by route handlers via
       FastAPI's dependency injection.

Why an object (not a module-level engine):
    The pool is the only shared mutable resource in the process. Passing it
    explicitly lets every test build an isolated database and lets two apps
    (e.g. one per profile) live side by side without touching globals.

Connection Pooling Strategy:
    pool_size=10:      Maximum concurrent storage connections (DB_POOL_SIZE)
    max_overflow=0:    No burst connections beyond pool_size
    pool_timeout=10s:  Acquisition timeout; an unreachable backend fails fast
    pool_pre_ping:     Validates connections before use
"""

import logging
from typing import AsyncGenerator, Iterable, Optional

from fastapi import Request
from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from vrcx_api.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models; shares one MetaData for schema setup."""
    pass


# Dialects whose INSERT construct supports ON CONFLICT clauses
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def dialect_insert(db: AsyncSession, entity):
    """
    Build a dialect-specific INSERT that supports ON CONFLICT.

    What:  Returns `postgresql.insert(entity)` or `sqlite.insert(entity)`
           depending on the engine bound to the session.
    Why:   Upserts and insert-or-ignore must be one atomic statement; the
           generic `sqlalchemy.insert` has no conflict clause.

    Raises:
        ArgumentError: the bound dialect has no ON CONFLICT support.
    """
    dialect = db.get_bind().dialect.name
    try:
        insert = _UPSERT_INSERTS[dialect]
    except KeyError:
        raise ArgumentError(f"ON CONFLICT inserts are not supported for dialect '{dialect}'") from None
    return insert(entity)


class Database:
    """
    Owns the async engine and session factory for one application instance.

    Attributes:
        engine:           AsyncEngine with a bounded pool
        session_factory:  async_sessionmaker producing AsyncSession objects
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 0,
        pool_timeout: float = 10.0,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_pre_ping=pool_pre_ping,
            pool_recycle=3600,
            echo=echo,
        )
        # expire_on_commit=False: rows stay readable after the upsert commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    async def create_schema(self, tables: Optional[Iterable[Table]] = None) -> None:
        """
        Create the given tables if they do not exist yet.

        What:  Idempotent schema setup; existing tables are never altered or dropped.
        When:  Once during application startup (lifespan) and in test fixtures.

        Raises:
            ConfigurationError: storage unreachable or CREATE rejected. This
            aborts process startup.
        """
        table_list = list(tables) if tables is not None else None
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(
                    Base.metadata.create_all,
                    tables=table_list,
                    checkfirst=True,
                )
        except (SQLAlchemyError, OSError) as e:
            logger.error("Schema setup failed: %s", str(e))
            raise ConfigurationError(
                message="Could not create the database schema",
                context={"error_type": type(e).__name__},
            ) from e

        names = ", ".join(t.name for t in table_list) if table_list else "all tables"
        logger.info("Schema ready (%s)", names)

    async def dispose(self) -> None:
        """Close all pooled connections; called on application shutdown."""
        await self.engine.dispose()


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the app's Database
        2. Yields it to the route handler
        3. On success: commits (no-op for pure reads)
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session, returning the connection to the pool
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
