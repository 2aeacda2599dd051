from .favourite_schemas import (
    CascadeRemovalResponse,
    FavouriteBookRequest,
    FavouriteBooksResponse,
)
from .user_schemas import (
    PermissionsUpdate,
    PermissionsUpdatedResponse,
    TokenResponse,
    UserCreate,
    UserListResponse,
    UserLoginRequest,
    UserRegisteredResponse,
    UserResponse,
)

__all__ = [
    "CascadeRemovalResponse",
    "FavouriteBookRequest",
    "FavouriteBooksResponse",
    "PermissionsUpdate",
    "PermissionsUpdatedResponse",
    "TokenResponse",
    "UserCreate",
    "UserListResponse",
    "UserLoginRequest",
    "UserRegisteredResponse",
    "UserResponse",
]
