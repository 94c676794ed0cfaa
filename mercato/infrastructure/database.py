"""Database configuration and session management.

Provides the async SQLAlchemy engine and session factory. The engine is
built on first use so the in-memory backend never needs a database driver.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from mercato.infrastructure.config import settings

# Base class for models
Base = declarative_base()


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Create the async engine for the configured database URL."""
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


@lru_cache(maxsize=1)
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the engine."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """Open a database session scoped to one unit of work.

    Commits when the caller finishes cleanly and rolls back on any error,
    which is then re-raised.

    Yields:
        AsyncSession for database operations.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
