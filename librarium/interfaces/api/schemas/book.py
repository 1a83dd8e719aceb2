"""Catalog schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BookRead(BaseModel):
    id: int
    title: str
    isbn: str | None
    author_name: str | None
    category_name: str | None
    publication_year: int | None
    language: str | None
    description: str | None
    total_copies: int
    available_copies: int
    shelf_location: str | None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class BookCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    copies: int = Field(1, ge=1, le=100, description="Ejemplares a registrar")
    isbn: str | None = Field(default=None, max_length=20)
    author_name: str | None = Field(default=None, max_length=255)
    category_name: str | None = Field(default=None, max_length=100)
    publication_year: int | None = Field(default=None, ge=0, le=9999)
    language: str | None = Field(default=None, max_length=50)
    description: str | None = None
    shelf_location: str | None = Field(default=None, max_length=50)

    model_config = ConfigDict(extra="forbid")


class BookListResponse(BaseModel):
    books: list[BookRead]
    total: int
    page: int
    limit: int
    total_pages: int


class BookAvailabilityRead(BaseModel):
    """Current lending state of a book."""

    available: bool
    available_copies: int
    total_copies: int
    queue_length: int

    model_config = ConfigDict(from_attributes=True)
