"""Book service — list and upsert logic shared by the book routes."""

from typing import List, Sequence

import structlog

from bookstore.domain.repositories.book_repository import BookRepository
from bookstore.domain.schemas.book import BookRead, BookWrite

logger = structlog.get_logger(__name__)


def list_books(repo: BookRepository, genre_ids: Sequence[int] = ()) -> List[BookRead]:
    """All books by title, or only those tagged with one of `genre_ids`."""
    if genre_ids:
        return repo.get_all_in_genres(genre_ids)
    return repo.get_all()


def save_book(repo: BookRepository, payload: BookWrite) -> int:
    if payload.id == 0:
        book_id = repo.insert(payload)
        logger.info("Book created", book_id=book_id, genres=len(payload.genre_ids))
        return book_id

    repo.update(payload)
    logger.info("Book updated", book_id=payload.id, genres=len(payload.genre_ids))
    return payload.id
