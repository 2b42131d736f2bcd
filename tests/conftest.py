"""
Pytest configuration and fixtures for the Bookstore API tests.

Each test gets its own SQLite database file in a temporary directory.
"""

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bookstore.config import Settings
from bookstore.domain.models.book import Author, Book, Genre
from bookstore.domain.models.token import Token
from bookstore.domain.models.user import User
from bookstore.domain.schemas.auth import UserWrite
from bookstore.infrastructure.database import Database, connect
from bookstore.infrastructure.repositories.book_repository import SQLAlchemyBookRepository
from bookstore.infrastructure.repositories.token_repository import SQLAlchemyTokenRepository
from bookstore.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from bookstore.main import create_app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "password"


# =============================================================================
# Settings & Database
# =============================================================================

@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file, ignoring any .env."""
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'bookstore.db'}",
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
        DEFAULT_ADMIN_EMAIL=ADMIN_EMAIL,
        DEFAULT_ADMIN_PASSWORD=ADMIN_PASSWORD,
    )


@pytest.fixture
def database(settings) -> Generator[Database, None, None]:
    database = connect(settings.DATABASE_URL, timeout=settings.DB_TIMEOUT_SECONDS)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def session(database) -> Generator[Session, None, None]:
    db = database.session()
    yield db
    db.close()


# =============================================================================
# Repositories
# =============================================================================

@pytest.fixture
def users(session) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(session, User)


@pytest.fixture
def tokens(session) -> SQLAlchemyTokenRepository:
    return SQLAlchemyTokenRepository(session, Token)


@pytest.fixture
def books(session) -> SQLAlchemyBookRepository:
    return SQLAlchemyBookRepository(session, Book)


@pytest.fixture
def make_user(users) -> Callable[..., User]:
    """Insert a user and return the loaded row."""
    def _make_user(email: str = "jack@example.com", password: str = "secret", active: bool = True) -> User:
        user_id = users.insert(
            UserWrite(email=email, first_name="Jack", last_name="Smith", active=active),
            password,
        )
        return users.get_one(user_id)
    return _make_user


@pytest.fixture
def catalogue(session) -> dict:
    """Two authors and three genres, committed."""
    authors = [Author(author_name="Ursula K. Le Guin"), Author(author_name="Terry Pratchett")]
    genres = [Genre(genre_name="Science Fiction"), Genre(genre_name="Fantasy"), Genre(genre_name="Humour")]
    session.add_all(authors + genres)
    session.commit()
    return {
        "authors": {a.author_name: a.id for a in authors},
        "genres": {g.genre_name: g.id for g in genres},
    }


# =============================================================================
# Application
# =============================================================================

@pytest.fixture
def client(settings) -> Generator[TestClient, None, None]:
    """TestClient with the lifespan running, so the store is connected and seeded."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client) -> dict:
    response = client.post("/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    token = response.json()["data"]["token"]["token"]
    return {"Authorization": f"Bearer {token}"}
