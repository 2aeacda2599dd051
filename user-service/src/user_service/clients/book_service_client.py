"""
Book Service client for the User Service.

Fetches books by id on behalf of a caller, forwarding the caller's own
credential so the book_service applies its policy to the real user.
"""

from typing import Iterable
from uuid import UUID

from fastapi import status
from pydantic import ValidationError as PydanticValidationError

from shared.clients.service_client import ServiceClient
from shared.exceptions import UpstreamRejected

from ..config import settings
from ..logging_config import logger
from ..schemas.favourite_schemas import FavouriteBooksResponse


class BookServiceClient:
    """Client for the Book Service API."""

    def __init__(self, service_client: ServiceClient):
        self.service_client = service_client

    async def fetch_books(
        self, book_ids: Iterable[UUID], page: int, authorization: str
    ) -> FavouriteBooksResponse:
        """
        Fetch one page of the given books.

        Returns:
            The book_service page, `{total, books}`

        Raises:
            UpstreamUnreachable: If the book_service cannot be reached
            UpstreamRejected: If the book_service answers with an error or
                with a body that is not a page of books
        """
        ids = ",".join(str(book_id) for book_id in book_ids)
        logger.debug(f"Fetching favourite books page {page} from book_service")
        result = await self.service_client.call(
            "GET",
            "/books",
            headers={"Authorization": authorization},
            params={"id": ids, "page": page},
        )

        response = result.unwrap()
        try:
            return FavouriteBooksResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Unexpected body from book_service /books: {e}")
            raise UpstreamRejected(
                self.service_client.service_name,
                status.HTTP_502_BAD_GATEWAY,
                "Invalid response from Book service.",
            ) from e


def get_book_service_client() -> BookServiceClient:
    """
    FastAPI dependency for obtaining a BookServiceClient instance.

    Returns:
        Configured BookServiceClient instance
    """
    return BookServiceClient(
        ServiceClient(
            base_url=settings.BOOK_SERVICE_URL,
            service_name="Book service",
            timeout=settings.SERVICE_CALL_TIMEOUT_SECONDS,
        )
    )
