"""
Favourites Consistency Manager.

Owns each user's list of favourite book ids. The ids point into the
book_service's entity space, which this service cannot read or lock, so a
reference may briefly outlive its book; it is cleaned up by `cascade_remove`
when the book_service reports the deletion.
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.exceptions import (
    AlreadyFavourite,
    InvalidBookReference,
    NotFavourite,
    NotFoundError,
)
from shared.security.gateway import RequestIdentity

from ..clients.book_service_client import BookServiceClient, get_book_service_client
from ..crud import favourites as favourites_crud
from ..crud import users as users_crud
from ..db import get_db
from ..logging_config import logger
from ..schemas.favourite_schemas import FavouriteBooksResponse


def parse_book_id(book_id: str) -> Optional[UUID]:
    """Return the UUID a book id string denotes, or None if it is malformed."""
    try:
        return UUID(str(book_id))
    except ValueError:
        return None


class FavouritesManager:
    """Add, remove, list and cascade-remove favourite book references."""

    def __init__(self, db: AsyncSession, book_client: BookServiceClient):
        self.db = db
        self.book_client = book_client

    async def _ensure_user(self, user_id: UUID) -> None:
        if await users_crud.get_user_by_id(self.db, user_id) is None:
            raise NotFoundError("User not found.")

    async def list_favourites(
        self, identity: RequestIdentity, page: int = 1
    ) -> FavouriteBooksResponse:
        """
        One page of the caller's favourite books, resolved by the book_service.

        Books deleted since they were added are simply absent from the page.
        No outbound call is made when the user has no favourites.
        """
        await self._ensure_user(identity.user_id)

        book_ids = await favourites_crud.list_favourite_book_ids(
            self.db, identity.user_id
        )
        if not book_ids:
            return FavouriteBooksResponse(total=0, books=[])

        return await self.book_client.fetch_books(
            book_ids, page=page, authorization=identity.credential
        )

    async def add_favourite(self, user_id: UUID, book_id: str) -> None:
        """
        Add a book reference. Existence in the book_service is not checked.

        Raises:
            InvalidBookReference: If `book_id` is not a well-formed id
            AlreadyFavourite: If the book is already in the list
        """
        parsed_id = parse_book_id(book_id)
        if parsed_id is None:
            raise InvalidBookReference()

        await self._ensure_user(user_id)

        if not await favourites_crud.add_favourite(self.db, user_id, parsed_id):
            raise AlreadyFavourite()
        logger.info(f"Book {parsed_id} added to favourites of user {user_id}")

    async def remove_favourite(self, user_id: UUID, book_id: str) -> None:
        """
        Remove a book reference by id, whether or not the book still exists.

        Raises:
            NotFavourite: If the book is not in the list
        """
        parsed_id = parse_book_id(book_id)
        if parsed_id is None:
            raise NotFavourite()

        await self._ensure_user(user_id)

        if not await favourites_crud.remove_favourite(self.db, user_id, parsed_id):
            raise NotFavourite()
        logger.info(f"Book {parsed_id} removed from favourites of user {user_id}")

    async def cascade_remove(self, book_id: str) -> int:
        """
        Drop a deleted book from every user's favourites.

        Idempotent: an absent or malformed id removes nothing and is not an error.
        """
        parsed_id = parse_book_id(book_id)
        if parsed_id is None:
            logger.info(f"Cascade for malformed book id '{book_id}' ignored")
            return 0

        removed = await favourites_crud.remove_book_from_all_favourites(
            self.db, parsed_id
        )
        logger.info(f"Cascade removed book {parsed_id} from {removed} favourite list(s)")
        return removed


def get_favourites_manager(
    db: AsyncSession = Depends(get_db),
    book_client: BookServiceClient = Depends(get_book_service_client),
) -> FavouritesManager:
    """FastAPI dependency for a request-scoped FavouritesManager."""
    return FavouritesManager(db, book_client)
