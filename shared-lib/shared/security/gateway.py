"""
Authorization gateway shared by the library services.

A request goes Unauthenticated -> Authenticated (a resolver turned the
credential into `{userId, role}`) -> Authorized (the role is in the allow-set
declared for the operation) before the route body runs. Any failed step
raises and short-circuits to the error handler.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Collection, Dict, FrozenSet, Iterable, Mapping, Optional
from uuid import UUID

from fastapi import Depends, Request

from ..exceptions import NotAuthorized
from ..schemas.identity import ResolvedIdentity, Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestIdentity:
    """
    Request-scoped caller identity produced by the gateway.

    `credential` is the raw `Authorization` header value, kept so that
    downstream calls made on the caller's behalf can forward it unchanged.
    """

    user_id: UUID
    role: Role
    credential: str

    def __repr__(self) -> str:
        return f"RequestIdentity(user_id={self.user_id!s}, role={self.role.value})"


class IdentityResolver(ABC):
    """Turns an incoming credential into a resolved identity, or raises."""

    @abstractmethod
    async def resolve(self, authorization: Optional[str]) -> ResolvedIdentity:
        ...


def authorize_role(role: Role, allowed_roles: Collection[Role]) -> None:
    """Raise `NotAuthorized` unless `role` is one of `allowed_roles`."""
    if role not in allowed_roles:
        raise NotAuthorized()


class AccessPolicy:
    """Declared mapping of operation name to the roles allowed to run it."""

    def __init__(self, rules: Mapping[str, Iterable[Role]]):
        self._rules: Dict[str, FrozenSet[Role]] = {
            operation: frozenset(roles) for operation, roles in rules.items()
        }

    def allowed_roles(self, operation: str) -> FrozenSet[Role]:
        try:
            return self._rules[operation]
        except KeyError:
            raise ValueError(f"No access policy declared for operation '{operation}'")

    def check(self, operation: str, role: Role) -> None:
        authorize_role(role, self.allowed_roles(operation))


class AuthorizationGateway:
    """
    Builds FastAPI dependencies enforcing an `AccessPolicy`.

    Args:
        policy: The service's declared access policy
        get_resolver: FastAPI dependency returning the service's IdentityResolver
    """

    def __init__(
        self,
        policy: AccessPolicy,
        get_resolver: Callable[..., IdentityResolver],
    ):
        self.policy = policy
        self.get_resolver = get_resolver

    def requires(self, operation: str):
        """
        Dependency factory for a route performing `operation`.

        Unknown operations fail here, when the route module is imported.
        """
        allowed_roles = self.policy.allowed_roles(operation)

        async def resolve_identity(
            request: Request,
            resolver: IdentityResolver = Depends(self.get_resolver),
        ) -> RequestIdentity:
            authorization = request.headers.get("Authorization")
            resolved = await resolver.resolve(authorization)

            try:
                authorize_role(resolved.role, allowed_roles)
            except NotAuthorized:
                logger.warning(
                    f"Role '{resolved.role.value}' of user {resolved.user_id} "
                    f"is not allowed to run '{operation}'"
                )
                raise

            identity = RequestIdentity(
                user_id=resolved.user_id,
                role=resolved.role,
                credential=authorization,
            )
            request.state.identity = identity
            return identity

        resolve_identity.__name__ = f"requires_{operation.replace('-', '_')}"
        return resolve_identity
