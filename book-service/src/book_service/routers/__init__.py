"""
Exports the API routers of the Book Service.
"""

from .book_routes import router as book_router
from .health_routes import router as health_router

__all__ = ["book_router", "health_router"]
