"""
SQLAlchemy Implementation of Book, Author and Genre Repositories.
"""

from typing import Iterable, List, Optional

from slugify import slugify
from sqlalchemy import Select, delete, select

from bookstore.core.exceptions import EntityNotFoundException
from bookstore.domain.models.book import Author, Book, BookGenre, Genre
from bookstore.domain.repositories.book_repository import (
    AuthorRepository,
    BookRepository,
    GenreRepository,
)
from bookstore.domain.schemas.book import AuthorRead, BookRead, BookWrite, GenreRead
from bookstore.infrastructure.database import utcnow
from bookstore.infrastructure.repositories.base_repository import (
    SQLAlchemyRepository,
    translate_store_errors,
)

UNKNOWN_REFERENCE = "book references an unknown author or genre"


class SQLAlchemyBookRepository(SQLAlchemyRepository[Book], BookRepository):
    """Book repository implementation using SQLAlchemy."""

    def _book_query(self) -> Select:
        return select(Book, Author).outerjoin(Author, Book.author_id == Author.id)

    def _to_read(self, book: Book, author: Optional[Author]) -> BookRead:
        result = BookRead.model_validate(book, from_attributes=True)
        if author is not None:
            result.author = AuthorRead.model_validate(author)
        result.genres = self.genres_for_book(book.id)
        return result

    @translate_store_errors()
    def get_all(self, genre_ids: Iterable[int] = ()) -> List[BookRead]:
        # Filter values are matched against book ids
        query = self._book_query()
        ids = list(genre_ids)
        if ids:
            query = query.where(Book.id.in_(ids))
        rows = self.db.execute(query.order_by(Book.title)).all()
        return [self._to_read(book, author) for book, author in rows]

    @translate_store_errors()
    def get_all_in_genres(self, genre_ids: Iterable[int]) -> List[BookRead]:
        tagged = select(BookGenre.book_id).where(BookGenre.genre_id.in_(list(genre_ids)))
        query = self._book_query().where(Book.id.in_(tagged)).order_by(Book.title)
        return [self._to_read(book, author) for book, author in self.db.execute(query).all()]

    @translate_store_errors()
    def get_one_by_id(self, id: int) -> BookRead:
        row = self.db.execute(self._book_query().where(Book.id == id)).first()
        if row is None:
            raise EntityNotFoundException("Book not found", {"book_id": id})
        return self._to_read(*row)

    @translate_store_errors()
    def get_one_by_slug(self, slug: str) -> BookRead:
        row = self.db.execute(self._book_query().where(Book.slug == slug)).first()
        if row is None:
            raise EntityNotFoundException("Book not found", {"slug": slug})
        return self._to_read(*row)

    @translate_store_errors()
    def genres_for_book(self, id: int) -> List[GenreRead]:
        query = (
            select(Genre)
            .join(BookGenre, BookGenre.genre_id == Genre.id)
            .where(BookGenre.book_id == id)
            .order_by(Genre.genre_name)
        )
        return [GenreRead.model_validate(genre) for genre in self.db.scalars(query)]

    @translate_store_errors(UNKNOWN_REFERENCE)
    def insert(self, book: BookWrite) -> int:
        now = utcnow()
        row = Book(
            title=book.title,
            author_id=book.author_id,
            publication_year=book.publication_year,
            slug=slugify(book.title),
            description=book.description,
            created_at=now,
            updated_at=now,
        )
        self.db.add(row)
        self.db.flush()
        if book.genre_ids:
            self.set_genres(row.id, book.genre_ids)
        self.db.commit()
        return row.id

    @translate_store_errors(UNKNOWN_REFERENCE)
    def update(self, book: BookWrite) -> None:
        row = self.db.get(Book, book.id)
        if row is None:
            raise EntityNotFoundException("Book not found", {"book_id": book.id})

        row.title = book.title
        row.author_id = book.author_id
        row.publication_year = book.publication_year
        row.slug = slugify(book.title)
        row.description = book.description
        row.updated_at = utcnow()

        # An empty list leaves the current genres alone
        if book.genre_ids:
            self.set_genres(book.id, book.genre_ids)
        self.db.commit()

    @translate_store_errors(UNKNOWN_REFERENCE)
    def set_genres(self, book_id: int, genre_ids: Iterable[int]) -> None:
        """Replace the book's genre set. Flushes only; the caller commits."""
        self.db.execute(delete(BookGenre).where(BookGenre.book_id == book_id))
        now = utcnow()
        for genre_id in dict.fromkeys(genre_ids):
            self.db.add(BookGenre(book_id=book_id, genre_id=genre_id, created_at=now, updated_at=now))
        self.db.flush()

    @translate_store_errors()
    def delete_by_id(self, id: int) -> None:
        self.db.execute(delete(BookGenre).where(BookGenre.book_id == id))
        self.db.execute(delete(Book).where(Book.id == id))
        self.db.commit()


class SQLAlchemyAuthorRepository(SQLAlchemyRepository[Author], AuthorRepository):

    @translate_store_errors()
    def get_all(self) -> List[Author]:
        return list(self.db.scalars(select(Author).order_by(Author.author_name)))


class SQLAlchemyGenreRepository(SQLAlchemyRepository[Genre], GenreRepository):

    @translate_store_errors()
    def get_all(self) -> List[Genre]:
        return list(self.db.scalars(select(Genre).order_by(Genre.genre_name)))
