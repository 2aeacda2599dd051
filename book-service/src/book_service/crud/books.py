"""
CRUD operations for books.

This module provides database operations for creating, reading,
updating, and deleting books in the catalogue.
"""

from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.exceptions import NotFoundError

from ..logging_config import logger
from ..models.book import Book, CascadeIntent
from ..schemas.book import BookCreate, BookUpdate


async def create_book(db: AsyncSession, book_data: BookCreate) -> Book:
    """
    Create a new book.

    Args:
        db: Database session
        book_data: Book data

    Returns:
        Created Book instance
    """
    book = Book(**book_data.model_dump())
    db.add(book)
    await db.commit()
    await db.refresh(book)

    logger.info(f"Created book: {book.title} (ID: {book.id})")
    return book


async def get_book(db: AsyncSession, book_id: UUID) -> Book:
    """
    Get a book by ID.

    Raises:
        NotFoundError: If the book is not found
    """
    result = await db.execute(select(Book).where(Book.id == book_id))
    book = result.scalar_one_or_none()

    if not book:
        raise NotFoundError("Book not found.")

    return book


async def list_books(
    db: AsyncSession,
    page: int = 1,
    page_size: int = 10,
    book_ids: Optional[Sequence[UUID]] = None,
    search: Optional[str] = None,
) -> Tuple[List[Book], int]:
    """
    List books with pagination and optional filtering.

    Args:
        db: Database session
        page: Page number (1-indexed)
        page_size: Number of items per page
        book_ids: Restrict to these ids; ids with no book are simply absent
        search: Case-insensitive partial match on title or ISBN

    Returns:
        Tuple of (list of Book instances, total count)
    """
    offset = (page - 1) * page_size

    query = select(Book)
    if book_ids is not None:
        query = query.where(Book.id.in_(book_ids))
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(Book.title.ilike(pattern), Book.isbn.ilike(pattern)))

    count_query = select(func.count()).select_from(query.subquery())
    total_count = (await db.execute(count_query)).scalar_one()

    query = query.order_by(Book.title, Book.id).offset(offset).limit(page_size)
    result = await db.execute(query)
    return list(result.scalars().all()), total_count


async def update_book(db: AsyncSession, book_id: UUID, book_data: BookUpdate) -> Book:
    """
    Update the given fields of a book.

    Raises:
        NotFoundError: If the book is not found
    """
    book = await get_book(db, book_id)

    update_data = book_data.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(book, key, value)

    await db.commit()
    await db.refresh(book)

    logger.info(f"Updated book: {book.title} (ID: {book.id})")
    return book


async def delete_book(db: AsyncSession, book_id: UUID) -> CascadeIntent:
    """
    Delete a book and record the favourites cascade it owes, atomically.

    Returns:
        The pending CascadeIntent

    Raises:
        NotFoundError: If the book is not found
    """
    book = await get_book(db, book_id)

    await db.delete(book)
    intent = CascadeIntent(book_id=book.id)
    db.add(intent)
    await db.commit()
    await db.refresh(intent)

    logger.info(f"Deleted book {book_id}; cascade intent {intent.id} queued")
    return intent
