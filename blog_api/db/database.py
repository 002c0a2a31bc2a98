"""
Async engine, sessions and schema bootstrap.

One engine per process. Route handlers get a session through
`get_session`, which wraps the whole request in a single transaction;
background code uses `transaction()` directly.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from orjson import dumps
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from blog_api.configs import pool_kwargs, settings
from blog_api.decorators.with_retry import with_retry
from blog_api.monitoring import get_logger

logger = get_logger(__name__)


def json_serializer(value: Any) -> str:
    """Serialize JSON columns (tags) with orjson."""
    return dumps(value).decode()


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores FOREIGN KEY clauses unless each connection opts in."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: Any, connection_record: object) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _log_pool_events(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Database connection opened")

    @event.listens_for(engine.sync_engine, "close")
    def on_close(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Database connection closed")


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    json_serializer=json_serializer,
    **pool_kwargs(),
)

if settings.is_sqlite:
    _enable_sqlite_foreign_keys(engine)
if settings.DEBUG:
    _log_pool_events(engine)

async_session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncSession]:
    """
    Open a session whose work commits on exit and rolls back on error.

    Example:
        ```python
        async with transaction() as session:
            await BlogRepository(session).increment_read_count(blog_id)
        ```
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency: one transaction per request."""
    async with transaction() as session:
        yield session


async def ping() -> bool:
    """Return whether the database answers a trivial query."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return True


@with_retry(max_retries=5, base_delay=0.5, max_delay=5.0)
async def init_db() -> None:
    """
    Create missing tables, retrying while the server comes up.

    Deployed schemas are managed by Alembic; this only fills gaps, which
    keeps local runs and tests free of a migration step.
    """
    # Registers every table on SQLModel.metadata
    from blog_api import models  # noqa: F401, PLC0415

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables ready")


async def drop_db() -> None:
    """Drop every table (test teardown)."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)


async def close_db() -> None:
    """Release pooled connections on shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")
