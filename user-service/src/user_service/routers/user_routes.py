# user-service/src/user_service/routers/user_routes.py
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shared.exceptions import NotFoundError
from shared.security.gateway import RequestIdentity

from ..config import settings
from ..crud import users as users_crud
from ..db import get_db
from ..dependencies import requires
from ..logging_config import logger
from ..schemas.user_schemas import (
    PermissionsUpdate,
    PermissionsUpdatedResponse,
    UserListResponse,
    UserResponse,
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=UserListResponse, summary="List or look up users")
async def get_users(
    id: Optional[str] = Query(None, description="Return only the user with this id"),
    search: Optional[str] = Query(None, description="Substring of name or email"),
    page: int = Query(1, ge=1, description="Page number"),
    db: AsyncSession = Depends(get_db),
    identity: RequestIdentity = Depends(requires("get-users")),
):
    if id is not None:
        try:
            user = await users_crud.get_user_by_id(db, UUID(id))
        except ValueError:
            user = None
        if user is None:
            raise NotFoundError("User not found.")
        return UserListResponse(total=1, users=[UserResponse.model_validate(user)])

    users, total = await users_crud.list_users(
        db, page=page, page_size=settings.PAGE_SIZE, search=search
    )
    return UserListResponse(
        total=total, users=[UserResponse.model_validate(u) for u in users]
    )


@router.patch(
    "/{user_id}/permissions",
    response_model=PermissionsUpdatedResponse,
    summary="Change a user's role or account status",
)
async def update_user_permissions(
    user_id: UUID,
    changes: PermissionsUpdate,
    db: AsyncSession = Depends(get_db),
    identity: RequestIdentity = Depends(requires("update-user-permissions")),
):
    logger.info(f"User {identity.user_id} updating permissions of {user_id}")
    user = await users_crud.update_permissions(db, user_id, changes)
    return PermissionsUpdatedResponse(
        message="User permissions updated.", user=UserResponse.model_validate(user)
    )
