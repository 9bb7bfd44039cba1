"""
PetSoft Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the whole suite.
How:   The environment is pointed at an in-memory SQLite database before any
       petsoft import, so settings, the engine and the singletons all pick
       up test values.

Fixture Hierarchy:
    Unit (no database):
    ├── mock_db_session: AsyncMock standing in for AsyncSession
    ├── session_user:    An authenticated SessionUser
    └── pet_form_data:   Valid camelCase pet fields

    Integration (SQLite via aiosqlite, fresh schema per test):
    ├── db_engine → db_session
    ├── test_client:  httpx AsyncClient on the app, get_db_session overridden
    ├── create_user:  factory inserting a user with a bcrypt hash
    └── login_as:     sets a valid session cookie on test_client
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SESSION_SECRET"] = "test-session-secret-that-is-long-enough-for-hs256"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_not_real"
os.environ["CANONICAL_URL"] = "http://petsoft.test"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum cost keeps hashing fast
os.environ["RATE_LIMIT_REQUESTS"] = "10000"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from petsoft.config import settings
from petsoft.database import Base, get_db_session
from petsoft.models.user import User
from petsoft.schemas.auth import SessionUser
from petsoft.services.passwords import hash_password
from petsoft.services.session_provider import session_provider
from petsoft.services.view_cache import view_cache


@pytest.fixture(autouse=True)
def clear_view_cache():
    """Cached listings must not leak between tests."""
    view_cache.clear()
    yield
    view_cache.clear()


# ══════════════════════════════════════════════════════════════════════════
# Unit Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = pet
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def session_user():
    return SessionUser(user_id=uuid4(), email="owner@example.com")


@pytest.fixture
def pet_form_data():
    return {
        "name": "Rex",
        "ownerName": "Alex",
        "imageUrl": "",
        "age": 3,
        "notes": "Needs a walk at noon.",
    }


# ══════════════════════════════════════════════════════════════════════════
# Integration Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    # StaticPool: every session shares the one in-memory database
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(db_session_factory):
    async with db_session_factory() as session:
        yield session


@pytest.fixture
def create_user(db_session_factory):
    """Factory: `await create_user(email, password)` → User."""

    async def _create(email: str = "owner@example.com", password: str = "hunter22") -> User:
        async with db_session_factory() as session:
            user = User(email=email, hashed_password=await hash_password(password))
            session.add(user)
            await session.commit()
            return user

    return _create


@pytest_asyncio.fixture
async def test_client(db_session_factory):
    """
    HTTPX AsyncClient on the FastAPI app, backed by the test database.

    Redirects are not followed so tests can assert on 303 responses.
    """
    from petsoft.main import app

    async def _override_db_session():
        async with db_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def login_as(test_client):
    """Attach a valid session cookie for `user` to test_client."""

    def _login(user: User) -> None:
        test_client.cookies.set(
            settings.session_cookie_name,
            session_provider.issue_token(user.id, user.email),
        )

    return _login
