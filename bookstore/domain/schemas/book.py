"""Pydantic schemas for the Book domain."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class AuthorRead(BaseModel):
    # Zero values stand in for a book whose author row is missing
    id: int = 0
    author_name: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class GenreRead(BaseModel):
    id: int
    genre_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BookRead(BaseModel):
    id: int
    title: str
    author_id: int
    publication_year: int
    slug: str
    description: str
    author: AuthorRead = AuthorRead()
    genres: list[GenreRead] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookWrite(BaseModel):
    """Inbound book payload. `id == 0` creates; the slug is always derived from the title."""
    id: int = 0
    title: str
    author_id: int
    publication_year: int = 0
    description: str = ""
    genre_ids: list[int] = []
