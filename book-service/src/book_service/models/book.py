# book-service/src/book_service/models/book.py
"""
Book models for the Book Service.

This module defines SQLAlchemy models for the book catalogue and for the
outbox of favourites cascades owed to the user_service.
"""

from datetime import datetime, timezone
from enum import Enum as PyEnum

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text, Uuid

from shared.models.base import Base, TimestampMixin, UUIDMixin


class Book(Base, UUIDMixin, TimestampMixin):
    """A book in the catalogue."""

    __tablename__ = "books"

    title = Column(String(255), nullable=False, index=True)
    isbn = Column(String(32), nullable=False)
    publication_year = Column(Integer, nullable=False)
    authors = Column(JSON, nullable=False, default=list)
    genres = Column(JSON, nullable=False, default=list)
    awards_won = Column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<Book(id={self.id}, title='{self.title}')>"


class CascadeStatus(str, PyEnum):
    """Delivery state of a favourites cascade."""

    PENDING = "pending"
    DELIVERED = "delivered"
    FAILED = "failed"  # Gave up after the configured number of attempts


class CascadeIntent(Base, UUIDMixin, TimestampMixin):
    """
    A pending request to drop a deleted book from every user's favourites.

    Written in the same transaction that deletes the book, so a deletion is
    never committed without its cascade being recorded.
    """

    __tablename__ = "cascade_intents"

    book_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    status = Column(
        String(20), nullable=False, default=CascadeStatus.PENDING.value, index=True
    )
    attempts = Column(Integer, nullable=False, default=0)
    next_attempt_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    last_error = Column(Text, nullable=True)
    delivered_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return (
            f"<CascadeIntent(book_id={self.book_id}, status='{self.status}', "
            f"attempts={self.attempts})>"
        )
