"""
User Service client for the Book Service.

Resolves bearer credentials through the user_service's verification endpoint
and delivers favourites cascades after a book is deleted.
"""

from uuid import UUID

from fastapi import status
from pydantic import ValidationError as PydanticValidationError

from shared.clients.service_client import ServiceClient, UpstreamResult
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    UpstreamRejected,
)
from shared.schemas.identity import ResolvedIdentity

from ..config import settings
from ..logging_config import logger


class UserServiceClient:
    """Client for the User Service API."""

    def __init__(self, service_client: ServiceClient, internal_service_key: str):
        self.service_client = service_client
        self._internal_service_key = internal_service_key

    async def verify(self, authorization: str) -> ResolvedIdentity:
        """
        Resolve a credential to `{userId, role}` via GET /auth/authorize.

        The header is forwarded unchanged.

        Raises:
            AuthenticationError: The user_service answered 401 (its message is kept)
            AuthorizationError: The user_service answered 403
            UpstreamUnreachable: The user_service could not be reached
            UpstreamRejected: Any other error answer
        """
        result = await self.service_client.call(
            "GET", "/auth/authorize", headers={"Authorization": authorization}
        )

        error = result.error
        if isinstance(error, UpstreamRejected):
            if error.status_code == status.HTTP_401_UNAUTHORIZED:
                raise AuthenticationError(error.message)
            if error.status_code == status.HTTP_403_FORBIDDEN:
                raise AuthorizationError(error.message)

        response = result.unwrap()
        try:
            return ResolvedIdentity.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Unexpected body from user_service /auth/authorize: {e}")
            raise UpstreamRejected(
                self.service_client.service_name,
                status.HTTP_502_BAD_GATEWAY,
                "Invalid response from User service.",
            ) from e

    async def remove_book_from_favourites(self, book_id: UUID) -> UpstreamResult:
        """
        Ask the user_service to drop a deleted book from every favourites list.

        The call is idempotent on the remote side, so it is safe to repeat.
        Failures are returned, not raised.
        """
        return await self.service_client.call(
            "DELETE",
            f"/internal/favourites/{book_id}",
            headers={"X-Service-Key": self._internal_service_key},
        )


def get_user_service_client() -> UserServiceClient:
    """
    FastAPI dependency for obtaining a UserServiceClient instance.

    Returns:
        Configured UserServiceClient instance
    """
    return UserServiceClient(
        ServiceClient(
            base_url=settings.USER_SERVICE_URL,
            service_name="User service",
            timeout=settings.SERVICE_CALL_TIMEOUT_SECONDS,
        ),
        internal_service_key=settings.INTERNAL_SERVICE_KEY,
    )
