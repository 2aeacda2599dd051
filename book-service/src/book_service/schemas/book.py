"""
Book schemas for the Book Service.

This module defines Pydantic schemas for API requests and responses
related to books. Wire field names are camelCase.
"""

from datetime import datetime
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def split_names(value: Union[str, List[str], None]) -> Optional[List[str]]:
    """Accept a list or a comma-separated string; trim and drop empty names."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list):
        return value
    return [
        name.strip() if isinstance(name, str) else name
        for name in value
        if not isinstance(name, str) or name.strip()
    ]


def strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class BookBase(CamelModel):
    """Base schema for book data."""

    title: str = Field(..., min_length=1, max_length=255, description="Book title")
    isbn: str = Field(..., min_length=1, max_length=32, description="ISBN")
    publication_year: int = Field(..., ge=0, le=9999, description="Year of publication")
    authors: List[str] = Field(..., min_length=1, description="Author names")
    genres: List[str] = Field(default_factory=list, description="Genres")
    awards_won: List[str] = Field(default_factory=list, description="Awards won")

    @field_validator("authors", "genres", "awards_won", mode="before")
    @classmethod
    def split_comma_separated(cls, v):
        return split_names(v)

    @field_validator("title", "isbn")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return strip_required(v)


class BookCreate(BookBase):
    """Schema for creating a new book."""

    pass


class BookUpdate(CamelModel):
    """Schema for updating an existing book; only given fields change."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    isbn: Optional[str] = Field(None, min_length=1, max_length=32)
    publication_year: Optional[int] = Field(None, ge=0, le=9999)
    authors: Optional[List[str]] = Field(None, min_length=1)
    genres: Optional[List[str]] = None
    awards_won: Optional[List[str]] = None

    @field_validator("authors", "genres", "awards_won", mode="before")
    @classmethod
    def split_comma_separated(cls, v):
        return split_names(v)

    @field_validator("title", "isbn")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return strip_required(v) if v is not None else v


class BookResponse(BookBase):
    """Schema for book responses."""

    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookListResponse(BaseModel):
    total: int
    books: List[BookResponse]


class BookMutationResponse(BaseModel):
    message: str
    book: BookResponse
