# user-service/src/user_service/routers/auth_routes.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.security.gateway import RequestIdentity

from ..crud import users as users_crud
from ..db import get_db
from ..dependencies import requires
from ..logging_config import logger
from ..rate_limiting import LOGIN_LIMIT, REGISTER_LIMIT, limiter
from ..schemas.user_schemas import (
    TokenResponse,
    UserCreate,
    UserLoginRequest,
    UserRegisteredResponse,
    UserResponse,
)
from ..services.identity import IdentityAuthority, get_identity_authority

router = APIRouter(prefix="/auth", tags=["User Authentication"])


@router.post(
    "/register",
    response_model=UserRegisteredResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
@limiter.limit(REGISTER_LIMIT)
async def register_user(
    request: Request,
    user_in: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new identity with the default `user` role.

    The role is never taken from the request body; elevated roles are granted
    only through the permissions endpoint.
    """
    logger.info(f"Registration attempt for email: {user_in.email}")
    user = await users_crud.create_user(db, user_in)
    return UserRegisteredResponse(
        message="User registered successfully.",
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse, summary="Log in with email and password")
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request,
    credentials: UserLoginRequest,
    db: AsyncSession = Depends(get_db),
    authority: IdentityAuthority = Depends(get_identity_authority),
):
    token = await authority.authenticate(db, credentials.email, credentials.password)
    return TokenResponse(token=token)


@router.get("/authorize", summary="Resolve a bearer token to its identity")
async def authorize(identity: RequestIdentity = Depends(requires("authorize"))):
    """
    Verification endpoint for services that delegate authentication here.

    Answers `{userId, role}` for a valid token and 401 otherwise.
    """
    return {"userId": str(identity.user_id), "role": identity.role.value}
