"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from bookstore.domain.models.book import Author, Book, Genre
from bookstore.domain.models.token import Token
from bookstore.domain.models.user import User
from bookstore.domain.repositories.book_repository import (
    AuthorRepository,
    BookRepository,
    GenreRepository,
)
from bookstore.domain.repositories.token_repository import TokenRepository
from bookstore.domain.repositories.user_repository import UserRepository
from bookstore.infrastructure.database import get_db
from bookstore.infrastructure.repositories.book_repository import (
    SQLAlchemyAuthorRepository,
    SQLAlchemyBookRepository,
    SQLAlchemyGenreRepository,
)
from bookstore.infrastructure.repositories.token_repository import SQLAlchemyTokenRepository
from bookstore.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return SQLAlchemyUserRepository(db, User)


def get_token_repository(db: Session = Depends(get_db)) -> TokenRepository:
    return SQLAlchemyTokenRepository(db, Token)


def get_book_repository(db: Session = Depends(get_db)) -> BookRepository:
    return SQLAlchemyBookRepository(db, Book)


def get_author_repository(db: Session = Depends(get_db)) -> AuthorRepository:
    return SQLAlchemyAuthorRepository(db, Author)


def get_genre_repository(db: Session = Depends(get_db)) -> GenreRepository:
    return SQLAlchemyGenreRepository(db, Genre)
