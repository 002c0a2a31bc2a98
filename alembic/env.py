"""
Alembic environment for the blog schema.

The database URL always comes from `Settings.DATABASE_URL`, so migrations
and the running API can never point at different databases. SQLite URLs
(local development, tests) run in batch mode because SQLite cannot
ALTER most column properties in place.
"""

from asyncio import run as asyncio_run

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel

from alembic import context
from blog_api.configs import settings
from blog_api.db.database import json_serializer

# Registers the tables on SQLModel.metadata for autogenerate
from blog_api.models import BlogDB, UserDB  # noqa: F401
from blog_api.monitoring import configure_logging, get_logger

configure_logging()
logger = get_logger("alembic.env")

target_metadata = SQLModel.metadata


def _configure(**kwargs: object) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        render_as_batch=settings.is_sqlite,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Render the migration SQL without connecting (`alembic upgrade --sql`)."""
    _configure(
        url=settings.DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Apply migrations over a short-lived async connection."""
    connectable = create_async_engine(
        settings.DATABASE_URL,
        poolclass=pool.NullPool,
        json_serializer=json_serializer,
    )
    logger.info("Running migrations", sqlite=settings.is_sqlite)

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio_run(run_migrations_online())
