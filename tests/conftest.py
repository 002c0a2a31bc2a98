# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from itertools import count
from pathlib import Path
from tempfile import gettempdir
from typing import Any
from uuid import UUID

# Settings are read at import time, so the test database and cheap
# hashing must be configured before anything from blog_api is imported
_TEST_DB = Path(gettempdir()) / f"blog_api_test_{os.getpid()}.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB}"
os.environ["ENVIRONMENT"] = "test"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-entropy"
os.environ["LOG_TO_FILE"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from blog_api.db import async_session_maker, drop_db, engine, init_db  # noqa: E402
from blog_api.main import app  # noqa: E402
from blog_api.managers.token_manager import create_access_token  # noqa: E402
from blog_api.models import UserDB  # noqa: E402

_titles = count(1)


def _blog_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "title": f"A perfectly fine blog title {next(_titles)}",
        "description": "A description long enough to pass validation",
        "body": "word " * 60,
        "tags": ["python", "testing"],
    }
    payload.update(overrides)
    return payload


def _bearer(user_id: UUID) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id=user_id)}"}


@pytest.fixture
async def database() -> AsyncGenerator[None]:
    """Fresh tables for one test."""
    await init_db()
    yield
    await drop_db()
    # Pooled aiosqlite connections are bound to this test's event loop
    await engine.dispose()


@pytest.fixture
async def session(database: None) -> AsyncGenerator[AsyncSession]:
    """Database session committed at the end of the test."""
    async with async_session_maker() as db_session:
        yield db_session
        await db_session.commit()


@pytest.fixture
async def client(database: None) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac


async def _make_user(email: str, first_name: str = "Test", last_name: str = "User") -> UserDB:
    async with async_session_maker() as db_session:
        user = UserDB(
            email=email,
            password_hash="$argon2id$v=19$m=8192,t=1,p=1$notarealhash",
            first_name=first_name,
            last_name=last_name,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user


@pytest.fixture
async def author(database: None) -> UserDB:
    return await _make_user("author@example.com", "Ada", "Lovelace")


@pytest.fixture
async def other_user(database: None) -> UserDB:
    return await _make_user("other@example.com", "Grace", "Hopper")


@pytest.fixture
def auth_headers(author: UserDB) -> dict[str, str]:
    """Bearer headers for the author."""
    return _bearer(author.uuid)


@pytest.fixture
def other_headers(other_user: UserDB) -> dict[str, str]:
    """Bearer headers for a user who owns nothing."""
    return _bearer(other_user.uuid)


@pytest.fixture
def blog_payload() -> Callable[..., dict[str, Any]]:
    """Factory for valid create payloads; keyword arguments override fields."""
    return _blog_payload


@pytest.fixture
def user_factory(database: None) -> Callable[..., Awaitable[UserDB]]:
    """Factory inserting users directly, skipping password hashing."""
    return _make_user


@pytest.fixture
def headers_for() -> Callable[[UUID], dict[str, str]]:
    """Factory for bearer headers of any user id."""
    return _bearer


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    _TEST_DB.unlink(missing_ok=True)
