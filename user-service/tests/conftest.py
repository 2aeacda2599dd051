"""
Test configuration for the User Service.

Every test gets a fresh in-memory SQLite database; the Book Service client is
replaced by an AsyncMock so no test touches the network.
"""

import os

# Settings are read at import time, so the environment must be set first.
os.environ.setdefault("USER_SERVICE_ENVIRONMENT", "testing")
os.environ.setdefault("USER_SERVICE_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("USER_SERVICE_JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("USER_SERVICE_INTERNAL_SERVICE_KEY", "test-internal-key")
os.environ.setdefault("USER_SERVICE_RATE_LIMIT_ENABLED", "false")

from typing import AsyncGenerator, Callable, Dict
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from shared.models.base import Base
from shared.schemas.identity import AccountStatus, Role
from user_service.clients.book_service_client import (
    BookServiceClient,
    get_book_service_client,
)
from user_service.db import get_db
from user_service.main import app as fastapi_app
from user_service.models import FavouriteBook, User
from user_service.schemas.favourite_schemas import FavouriteBooksResponse
from user_service.security import hash_password
from user_service.services.identity import get_identity_authority

# Ensure the root_path is set to empty string for tests
fastapi_app.root_path = ""

TEST_PASSWORD = "password123"


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(
            Base.metadata.create_all,
            tables=[User.__table__, FavouriteBook.__table__],
        )

    yield async_sessionmaker(
        bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False
    )

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def book_client() -> AsyncMock:
    """Stand-in for the Book Service; returns an empty page unless told otherwise."""
    client = AsyncMock(spec=BookServiceClient)
    client.fetch_books.return_value = FavouriteBooksResponse(total=0, books=[])
    return client


@pytest_asyncio.fixture
async def make_user(session_factory) -> Callable:
    """Factory creating users directly in the database."""
    counter = {"n": 0}

    async def _make_user(
        role: Role = Role.USER,
        status: AccountStatus = AccountStatus.ACTIVE,
        email: str = None,
        password: str = TEST_PASSWORD,
    ) -> User:
        counter["n"] += 1
        async with session_factory() as session:
            user = User(
                name=f"Test User {counter['n']}",
                email=email or f"user{counter['n']}@example.com",
                password_hash=hash_password(password),
                role=role.value,
                status=status.value,
            )
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    return _make_user


@pytest.fixture
def auth_header() -> Callable[[User], Dict[str, str]]:
    """Build an Authorization header carrying a freshly issued token."""

    def _auth_header(user: User) -> Dict[str, str]:
        token = get_identity_authority().issue_token(user.email, user.id, Role(user.role))
        return {"Authorization": f"Bearer {token}"}

    return _auth_header


@pytest_asyncio.fixture
async def client(session_factory, book_client) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an AsyncClient for testing FastAPI routes.

    Yields:
        AsyncClient: HTTP test client
    """

    async def override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_book_service_client] = lambda: book_client

    async with AsyncClient(
        transport=ASGITransport(app=fastapi_app), base_url="http://test"
    ) as client:
        yield client

    fastapi_app.dependency_overrides = {}
