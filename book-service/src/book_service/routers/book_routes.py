"""
API routes for the book catalogue.

Every route is guarded by the delegated authorization gateway; the operation
names map to the allowed roles in `BOOK_SERVICE_POLICY`.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.exceptions import InvalidBookReference, NotFoundError
from shared.schemas.common import Message
from shared.security.gateway import RequestIdentity

from ..config import settings
from ..crud import books as crud
from ..db import get_db
from ..dependencies import requires
from ..logging_config import logger
from ..schemas.book import (
    BookCreate,
    BookListResponse,
    BookMutationResponse,
    BookResponse,
    BookUpdate,
)
from ..services.cascade import CascadeDispatcher, get_cascade_dispatcher

router = APIRouter(prefix="/books", tags=["Books"])


def parse_book_ids(raw_ids: str) -> List[UUID]:
    """Parse a comma-separated id list; any malformed id is rejected."""
    book_ids = []
    for raw_id in raw_ids.split(","):
        raw_id = raw_id.strip()
        if not raw_id:
            continue
        try:
            book_ids.append(UUID(raw_id))
        except ValueError:
            raise InvalidBookReference(data={"id": raw_id})
    return book_ids


def _parse_path_id(book_id: str) -> UUID:
    try:
        return UUID(book_id)
    except ValueError:
        raise NotFoundError("Book not found.")


@router.get("", response_model=BookListResponse, summary="List books")
async def get_books(
    id: Optional[str] = Query(None, description="Comma-separated book ids"),
    search: Optional[str] = Query(None, description="Text search on title or ISBN"),
    page: int = Query(1, ge=1, description="Page number"),
    db: AsyncSession = Depends(get_db),
    identity: RequestIdentity = Depends(requires("get-books")),
):
    """
    List books with optional id filter and search.

    Ids that match no book are simply absent from the result.
    """
    book_ids = parse_book_ids(id) if id is not None else None
    books, total = await crud.list_books(
        db,
        page=page,
        page_size=settings.PAGE_SIZE,
        book_ids=book_ids,
        search=search,
    )
    return BookListResponse(
        total=total, books=[BookResponse.model_validate(b) for b in books]
    )


@router.post(
    "",
    response_model=BookMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
)
async def create_book(
    book: BookCreate,
    db: AsyncSession = Depends(get_db),
    identity: RequestIdentity = Depends(requires("create-book")),
):
    created = await crud.create_book(db, book)
    return BookMutationResponse(
        message="Book created.", book=BookResponse.model_validate(created)
    )


@router.patch("/{book_id}", response_model=BookMutationResponse, summary="Update a book")
async def update_book(
    book_id: str,
    book: BookUpdate,
    db: AsyncSession = Depends(get_db),
    identity: RequestIdentity = Depends(requires("update-book")),
):
    updated = await crud.update_book(db, _parse_path_id(book_id), book)
    return BookMutationResponse(
        message="Book updated.", book=BookResponse.model_validate(updated)
    )


@router.delete("/{book_id}", response_model=Message, summary="Delete a book")
async def delete_book(
    book_id: str,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    identity: RequestIdentity = Depends(requires("delete-book")),
    dispatcher: CascadeDispatcher = Depends(get_cascade_dispatcher),
):
    """
    Delete a book. Removal from users' favourites happens after the response.
    """
    intent = await crud.delete_book(db, _parse_path_id(book_id))
    logger.info(f"User {identity.user_id} deleted book {book_id}")
    background_tasks.add_task(dispatcher.dispatch_intent, intent.id)
    return Message(message="Book deleted.")

