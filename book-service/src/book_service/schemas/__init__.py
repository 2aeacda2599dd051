from .book import (
    BookCreate,
    BookListResponse,
    BookMutationResponse,
    BookResponse,
    BookUpdate,
)

__all__ = [
    "BookCreate",
    "BookListResponse",
    "BookMutationResponse",
    "BookResponse",
    "BookUpdate",
]
