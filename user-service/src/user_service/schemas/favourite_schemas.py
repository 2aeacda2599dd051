from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class FavouriteBookRequest(BaseModel):
    """Body of add/remove favourite; the id shape is checked by the manager."""

    model_config = ConfigDict(populate_by_name=True)

    book_id: str = Field(..., alias="bookId")


class FavouriteBooksResponse(BaseModel):
    """A page of favourite books as returned by the book_service."""

    total: int = 0
    books: List[Dict[str, Any]] = Field(default_factory=list)


class CascadeRemovalResponse(BaseModel):
    message: str
    removed: int
