"""
Test configuration for the Book Service.

This module provides test fixtures for database access, a fake User Service
reached through `httpx.MockTransport`, and API client testing.
"""

import os

# Settings are read at import time, so the environment must be set first.
os.environ.setdefault("BOOK_SERVICE_ENVIRONMENT", "testing")
os.environ.setdefault("BOOK_SERVICE_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BOOK_SERVICE_INTERNAL_SERVICE_KEY", "test-internal-key")
os.environ.setdefault("BOOK_SERVICE_USER_SERVICE_URL", "http://users.test/api/v1")
os.environ.setdefault("BOOK_SERVICE_CASCADE_SWEEP_INTERVAL_SECONDS", "0")

import uuid
from typing import AsyncGenerator, Dict, List

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from book_service.clients.user_service_client import (
    UserServiceClient,
    get_user_service_client,
)
from book_service.db import get_db
from book_service.main import app as fastapi_app
from book_service.models import Book, CascadeIntent
from book_service.services.cascade import CascadeDispatcher, get_cascade_dispatcher
from shared.clients.service_client import ServiceClient
from shared.models.base import Base

# Ensure the root_path is set to empty string for tests
fastapi_app.root_path = ""


class FakeUserService:
    """
    In-process stand-in for the User Service HTTP API.

    Tokens are looked up in `identities`; cascade calls are recorded and
    answered with `cascade_status`.
    """

    def __init__(self):
        self.identities: Dict[str, Dict[str, str]] = {
            "Bearer user-token": {"userId": str(uuid.uuid4()), "role": "user"},
            "Bearer admin-token": {"userId": str(uuid.uuid4()), "role": "admin"},
            "Bearer root-token": {"userId": str(uuid.uuid4()), "role": "super_admin"},
        }
        self.authorize_calls: List[str] = []
        self.cascade_calls: List[str] = []
        self.cascade_status = 200
        self.unreachable = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)

        path = request.url.path
        if request.method == "GET" and path == "/api/v1/auth/authorize":
            authorization = request.headers.get("Authorization")
            self.authorize_calls.append(authorization)
            identity = self.identities.get(authorization)
            if identity is None:
                return httpx.Response(401, json={"message": "Invalid or expired token."})
            return httpx.Response(200, json=identity)

        if request.method == "DELETE" and path.startswith("/api/v1/internal/favourites/"):
            if request.headers.get("X-Service-Key") != "test-internal-key":
                return httpx.Response(401, json={"message": "Invalid service key."})
            self.cascade_calls.append(path.rsplit("/", 1)[-1])
            if self.cascade_status != 200:
                return httpx.Response(self.cascade_status, json={"message": "Try later."})
            return httpx.Response(
                200, json={"message": "Book removed from favourites.", "removed": 1}
            )

        return httpx.Response(404, json={"message": "Invalid Url"})


@pytest.fixture
def user_service() -> FakeUserService:
    return FakeUserService()


@pytest.fixture
def user_client(user_service: FakeUserService) -> UserServiceClient:
    return UserServiceClient(
        ServiceClient(
            base_url="http://users.test/api/v1",
            service_name="User service",
            timeout=1.0,
            transport=httpx.MockTransport(user_service.handler),
        ),
        internal_service_key="test-internal-key",
    )


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
            tables=[Book.__table__, CascadeIntent.__table__],
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
def dispatcher(session_factory, user_client) -> CascadeDispatcher:
    return CascadeDispatcher(
        session_factory=session_factory,
        user_client=user_client,
        max_attempts=3,
        retry_base_seconds=2.0,
        retry_max_seconds=5.0,
    )


@pytest_asyncio.fixture
async def make_book(session_factory):
    """Factory creating books directly in the database."""

    async def _make_book(title: str = "Dune", **fields) -> Book:
        values = {
            "isbn": "978-0441013593",
            "publication_year": 1965,
            "authors": ["Frank Herbert"],
            "genres": ["Science Fiction"],
            "awards_won": ["Hugo Award"],
        }
        values.update(fields)
        async with session_factory() as session:
            book = Book(title=title, **values)
            session.add(book)
            await session.commit()
            await session.refresh(book)
            return book

    return _make_book


@pytest_asyncio.fixture
async def client(
    session_factory, user_client, dispatcher
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an AsyncClient for testing FastAPI routes.

    Yields:
        AsyncClient: HTTP test client
    """

    async def override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_user_service_client] = lambda: user_client
    fastapi_app.dependency_overrides[get_cascade_dispatcher] = lambda: dispatcher

    async with AsyncClient(
        transport=ASGITransport(app=fastapi_app), base_url="http://test"
    ) as client:
        yield client

    fastapi_app.dependency_overrides = {}
