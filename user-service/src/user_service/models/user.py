# user-service/src/user_service/models/user.py
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    String,
    UniqueConstraint,
    Uuid,
)

from shared.models.base import Base, TimestampMixin, UUIDMixin
from shared.schemas.identity import AccountStatus, Role


class User(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "users"

    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True, unique=True)
    password_hash = Column(String, nullable=False)
    role = Column(String(32), nullable=False, default=Role.USER.value)
    status = Column(String(32), nullable=False, default=AccountStatus.ACTIVE.value)

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE.value

    def __repr__(self):
        return f"<User(id='{self.id}', email='{self.email}', role='{self.role}')>"


class FavouriteBook(Base, UUIDMixin):
    """
    A reference from a user to a book owned by the book_service.

    Only the id is stored. The (user_id, book_id) constraint is what keeps a
    book from appearing twice in one user's favourites.
    """

    __tablename__ = "favourite_books"
    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uq_favourite_book"),
    )

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    book_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self):
        return f"<FavouriteBook(user_id='{self.user_id}', book_id='{self.book_id}')>"
