"""
Authentication dependencies for the User Service.

This service hosts the Identity Authority, so the gateway runs in local
mode: the bearer token is verified in-process.
"""

import secrets
from typing import Optional

from fastapi import Depends, Header

from shared.exceptions import AuthenticationError
from shared.schemas.identity import ResolvedIdentity, Role
from shared.security.gateway import AccessPolicy, AuthorizationGateway, IdentityResolver
from shared.security.jwt import parse_bearer

from ..config import settings
from ..logging_config import logger
from ..services.identity import IdentityAuthority, get_identity_authority

ALL_ROLES = {Role.USER, Role.ADMIN, Role.SUPER_ADMIN}
ADMIN_ROLES = {Role.ADMIN, Role.SUPER_ADMIN}

USER_SERVICE_POLICY = AccessPolicy(
    {
        "authorize": ALL_ROLES,
        "list-favourites": ALL_ROLES,
        "add-favourite": ALL_ROLES,
        "remove-favourite": ALL_ROLES,
        "get-users": ADMIN_ROLES,
        "update-user-permissions": {Role.SUPER_ADMIN},
    }
)


class LocalIdentityResolver(IdentityResolver):
    """Resolves a credential by verifying the token with the local authority."""

    def __init__(self, authority: IdentityAuthority):
        self.authority = authority

    async def resolve(self, authorization: Optional[str]) -> ResolvedIdentity:
        token = parse_bearer(authorization)
        return self.authority.verify_token(token)


def get_identity_resolver(
    authority: IdentityAuthority = Depends(get_identity_authority),
) -> IdentityResolver:
    return LocalIdentityResolver(authority)


gateway = AuthorizationGateway(USER_SERVICE_POLICY, get_identity_resolver)
requires = gateway.requires


async def require_internal_service(
    x_service_key: Optional[str] = Header(None, alias="X-Service-Key"),
) -> None:
    """
    Guard for service-to-service routes.

    The key is shared with the book_service through configuration.
    """
    if not x_service_key or not secrets.compare_digest(
        x_service_key.encode(), settings.INTERNAL_SERVICE_KEY.encode()
    ):
        logger.warning("Rejected internal call with a missing or wrong service key")
        raise AuthenticationError("Invalid service key.")
