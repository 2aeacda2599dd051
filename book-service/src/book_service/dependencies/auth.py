"""
Authentication dependencies for the Book Service.

This service holds no signing secret. The gateway runs in delegated mode:
every credential is resolved by the user_service.
"""

from typing import Optional

from fastapi import Depends

from shared.exceptions import TokenMissing
from shared.schemas.identity import ResolvedIdentity, Role
from shared.security.gateway import AccessPolicy, AuthorizationGateway, IdentityResolver

from ..clients.user_service_client import UserServiceClient, get_user_service_client

ADMIN_ROLES = {Role.ADMIN, Role.SUPER_ADMIN}

BOOK_SERVICE_POLICY = AccessPolicy(
    {
        "get-books": {Role.USER, Role.ADMIN, Role.SUPER_ADMIN},
        "create-book": ADMIN_ROLES,
        "update-book": ADMIN_ROLES,
        "delete-book": ADMIN_ROLES,
    }
)


class DelegatedIdentityResolver(IdentityResolver):
    """Resolves a credential by asking the user_service to verify it."""

    def __init__(self, user_client: UserServiceClient):
        self.user_client = user_client

    async def resolve(self, authorization: Optional[str]) -> ResolvedIdentity:
        # No network call for an absent credential.
        if not authorization:
            raise TokenMissing()
        return await self.user_client.verify(authorization)


def get_identity_resolver(
    user_client: UserServiceClient = Depends(get_user_service_client),
) -> IdentityResolver:
    return DelegatedIdentityResolver(user_client)


gateway = AuthorizationGateway(BOOK_SERVICE_POLICY, get_identity_resolver)
requires = gateway.requires
