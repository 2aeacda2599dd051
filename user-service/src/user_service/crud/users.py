# user-service/src/user_service/crud/users.py
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.exceptions import NotFoundError, ValidationError
from shared.schemas.identity import AccountStatus, Role

from ..logging_config import logger
from ..models.user import User
from ..schemas.user_schemas import PermissionsUpdate, UserCreate
from ..security import hash_password


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> Optional[User]:
    """Retrieves a user from the database by id."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalars().first()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    """Retrieves a user from the database by (case-insensitive) email."""
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalars().first()


async def create_user(
    db: AsyncSession,
    user_in: UserCreate,
    role: Role = Role.USER,
) -> User:
    """
    Creates a new user with a hashed password.

    Raises:
        ValidationError: If the email is already registered
    """
    if await get_user_by_email(db, user_in.email):
        raise ValidationError(data={"email": "Email is already registered."})

    user = User(
        name=user_in.name,
        email=user_in.email.lower(),
        password_hash=hash_password(user_in.password),
        role=role.value,
        status=AccountStatus.ACTIVE.value,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration for the same email.
        await db.rollback()
        raise ValidationError(data={"email": "Email is already registered."})
    await db.refresh(user)

    logger.info(f"User created: {user.id} (role: {user.role})")
    return user


async def list_users(
    db: AsyncSession,
    page: int = 1,
    page_size: int = 10,
    search: Optional[str] = None,
) -> Tuple[List[User], int]:
    """
    List users with pagination and optional substring search on name and email.

    Returns:
        Tuple of (list of User instances, total count)
    """
    offset = (page - 1) * page_size

    query = select(User)
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(User.name.ilike(pattern), User.email.ilike(pattern)))

    count_query = select(func.count()).select_from(query.subquery())
    total_count = (await db.execute(count_query)).scalar_one()

    query = query.order_by(User.created_at, User.email).offset(offset).limit(page_size)
    result = await db.execute(query)
    return list(result.scalars().all()), total_count


async def update_permissions(
    db: AsyncSession, user_id: UUID, changes: PermissionsUpdate
) -> User:
    """
    Change a user's role and/or account status.

    Raises:
        NotFoundError: If the user does not exist
    """
    user = await get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found.")

    if changes.role is not None:
        user.role = changes.role.value
    if changes.status is not None:
        user.status = changes.status.value

    await db.commit()
    await db.refresh(user)
    logger.info(
        f"Permissions updated for user {user.id}: role={user.role}, status={user.status}"
    )
    return user
