"""
Book Repository Interfaces.
Books are returned fully enriched with their author and genres.
"""

from typing import Iterable, List

from bookstore.domain.repositories.base import BaseRepository
from bookstore.domain.models.book import Author, Book, Genre
from bookstore.domain.schemas.book import BookRead, BookWrite, GenreRead


class BookRepository(BaseRepository[Book]):
    """Interface for Book operations."""

    def get_all(self, genre_ids: Iterable[int] = ()) -> List[BookRead]:
        """All books by title. A non-empty filter is matched against book ids."""
        ...

    def get_all_in_genres(self, genre_ids: Iterable[int]) -> List[BookRead]:
        """Books tagged with at least one of the given genres, by title."""
        ...

    def get_one_by_id(self, id: int) -> BookRead:
        ...

    def get_one_by_slug(self, slug: str) -> BookRead:
        ...

    def insert(self, book: BookWrite) -> int:
        ...

    def update(self, book: BookWrite) -> None:
        ...

    def set_genres(self, book_id: int, genre_ids: Iterable[int]) -> None:
        ...

    def delete_by_id(self, id: int) -> None:
        ...

    def genres_for_book(self, id: int) -> List[GenreRead]:
        ...


class AuthorRepository(BaseRepository[Author]):
    def get_all(self) -> List[Author]:
        ...


class GenreRepository(BaseRepository[Genre]):
    def get_all(self) -> List[Genre]:
        ...
