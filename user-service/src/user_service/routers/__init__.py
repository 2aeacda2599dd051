"""
Exports the API routers of the User Service.

- auth_router: registration, login and the token verification endpoint.
- favourite_router: the caller's favourite books.
- user_router: administrative user lookup and permission changes.
- internal_router: service-to-service endpoints (favourites cascade).
"""

from .auth_routes import router as auth_router
from .favourite_routes import router as favourite_router
from .health_routes import router as health_router
from .internal_routes import router as internal_router
from .user_routes import router as user_router

__all__ = [
    "auth_router",
    "favourite_router",
    "health_router",
    "internal_router",
    "user_router",
]
