"""
Test configuration for the shared package.

Provides a small FastAPI app wired with the shared error handlers and an
authorization gateway backed by a fake resolver.
"""

import logging
import uuid
from typing import AsyncGenerator, Dict, Optional

import pytest
import pytest_asyncio
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient

from shared.exceptions import TokenInvalid, TokenMissing, register_exception_handlers
from shared.schemas.identity import ResolvedIdentity, Role
from shared.security.gateway import (
    AccessPolicy,
    AuthorizationGateway,
    IdentityResolver,
    RequestIdentity,
)

USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
ADMIN_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")


class FakeResolver(IdentityResolver):
    """Maps bearer headers to identities from a fixed table."""

    def __init__(self, identities: Dict[str, ResolvedIdentity]):
        self.identities = identities
        self.calls = []

    async def resolve(self, authorization: Optional[str]) -> ResolvedIdentity:
        self.calls.append(authorization)
        if not authorization:
            raise TokenMissing()
        try:
            return self.identities[authorization]
        except KeyError:
            raise TokenInvalid()


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver(
        {
            "Bearer user-token": ResolvedIdentity(user_id=USER_ID, role=Role.USER),
            "Bearer admin-token": ResolvedIdentity(user_id=ADMIN_ID, role=Role.ADMIN),
        }
    )


@pytest.fixture
def gateway_app(resolver: FakeResolver) -> FastAPI:
    policy = AccessPolicy(
        {
            "read": {Role.USER, Role.ADMIN, Role.SUPER_ADMIN},
            "write": {Role.ADMIN, Role.SUPER_ADMIN},
        }
    )
    gateway = AuthorizationGateway(policy, lambda: resolver)

    app = FastAPI()
    register_exception_handlers(app, logging.getLogger("shared.tests"))

    @app.get("/items")
    async def read_items(identity: RequestIdentity = Depends(gateway.requires("read"))):
        return {"userId": str(identity.user_id), "role": identity.role.value}

    @app.post("/items")
    async def write_item(identity: RequestIdentity = Depends(gateway.requires("write"))):
        return {"credential": identity.credential}

    return app


@pytest_asyncio.fixture
async def client(gateway_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=gateway_app), base_url="http://test"
    ) as client:
        yield client
