"""Core database modules."""

from blog_api.db.database import (
    async_session_maker,
    close_db,
    drop_db,
    engine,
    get_session,
    init_db,
    ping,
    transaction,
)

__all__ = [
    "async_session_maker",
    "close_db",
    "drop_db",
    "engine",
    "get_session",
    "init_db",
    "ping",
    "transaction",
]
