"""
Store operations for favourite-book references.

Each mutation is a single statement so that concurrent requests for the same
user cannot lose each other's updates.
"""

from typing import List
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..logging_config import logger
from ..models.user import FavouriteBook


async def list_favourite_book_ids(db: AsyncSession, user_id: UUID) -> List[UUID]:
    """Book ids in the user's favourites, oldest first."""
    result = await db.execute(
        select(FavouriteBook.book_id)
        .where(FavouriteBook.user_id == user_id)
        .order_by(FavouriteBook.created_at)
    )
    return list(result.scalars().all())


async def add_favourite(db: AsyncSession, user_id: UUID, book_id: UUID) -> bool:
    """
    Insert the reference, relying on the unique constraint for duplicates.

    Returns:
        True if inserted, False if the book was already a favourite
    """
    db.add(FavouriteBook(user_id=user_id, book_id=book_id))
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info(f"Book {book_id} already in favourites of user {user_id}")
        return False
    return True


async def remove_favourite(db: AsyncSession, user_id: UUID, book_id: UUID) -> bool:
    """Delete one reference. Returns False if there was nothing to delete."""
    result = await db.execute(
        delete(FavouriteBook).where(
            FavouriteBook.user_id == user_id, FavouriteBook.book_id == book_id
        )
    )
    await db.commit()
    return result.rowcount > 0


async def remove_book_from_all_favourites(db: AsyncSession, book_id: UUID) -> int:
    """Delete every reference to a book. Returns the number of rows removed."""
    result = await db.execute(
        delete(FavouriteBook).where(FavouriteBook.book_id == book_id)
    )
    await db.commit()
    return result.rowcount
