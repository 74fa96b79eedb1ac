"""Async SQLAlchemy engine and session factory.

All database operations use the SQLAlchemy 2.0 async session pattern.
Production runs on PostgreSQL (asyncpg); any async SQLAlchemy URL works.
Connection errors are caught and re-raised as DatabaseConnectionError
so the API layer receives a typed, structured error.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from lingochat.core.config import settings
from lingochat.core.exceptions import DatabaseConnectionError

logger = structlog.get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


def build_engine(url: str, **overrides: Any) -> AsyncEngine:
    """Create an async engine. Pool sizing only applies to server databases."""
    options: dict[str, Any] = {"echo": False, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        options.update(pool_size=20, max_overflow=10)
    options.update(overrides)
    return create_async_engine(url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


engine: AsyncEngine = build_engine(settings.database_url)

async_session_factory = build_session_factory(engine)


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session that commits on success and rolls back on exception.

    SQLAlchemy driver errors are caught and re-raised as DatabaseConnectionError.
    """
    try:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("database_session_error", error=str(e))
                raise DatabaseConnectionError(f"Database operation failed: {e}") from e
            except Exception:
                await session.rollback()
                raise
    except DatabaseConnectionError:
        raise
    except SQLAlchemyError as e:
        logger.error("database_connection_error", error=str(e))
        raise DatabaseConnectionError(f"Database connection failed: {e}") from e


async def create_schema(target: AsyncEngine) -> None:
    """Create all tables. Used for local development and tests; production uses Alembic."""
    # Import models so they register on Base.metadata.
    import lingochat.models  # noqa: F401

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_database(target: AsyncEngine | None = None) -> None:
    """Gracefully dispose of the async engine connection pool."""
    logger.info("database_shutdown")
    await (target or engine).dispose()
