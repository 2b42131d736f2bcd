"""
Database connection manager.

`connect()` builds a bounded connection pool and pings it before returning,
so an unreachable store stops startup instead of failing the first request.
The resulting `Database` is held by the application, never by this module.
"""

from datetime import datetime, timezone
from typing import Generator

import structlog
from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookstore.core.exceptions import DatabaseConnectionError

logger = structlog.get_logger(__name__)

MAX_OPEN_DB_CONN = 5
MAX_IDLE_DB_CONN = 5
MAX_DB_LIFETIME_SECONDS = 5 * 60


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Database:
    """A pooled engine plus the session factory bound to it."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def session(self) -> Session:
        return self.session_factory()

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def create_all(self) -> None:
        # Import models so they are registered on Base.metadata
        from bookstore.domain.models import book, token, user  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def _connect_args(dsn: str, timeout: float) -> dict:
    backend = make_url(dsn).get_backend_name()
    if backend == "postgresql":
        # Every statement shares the per-call deadline; timestamps come back in UTC
        return {"options": f"-c statement_timeout={int(timeout * 1000)} -c timezone=UTC"}
    if backend == "sqlite":
        return {"check_same_thread": False, "timeout": timeout}
    return {}


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def connect(dsn: str, *, timeout: float = 3.0, echo: bool = False) -> Database:
    """Open a pool against `dsn` and verify it answers.

    Raises DatabaseConnectionError when the ping fails. There is no retry.
    """
    engine = create_engine(
        dsn,
        echo=echo,
        pool_size=MAX_IDLE_DB_CONN,
        max_overflow=MAX_OPEN_DB_CONN - MAX_IDLE_DB_CONN,
        pool_recycle=MAX_DB_LIFETIME_SECONDS,
        pool_timeout=timeout,
        connect_args=_connect_args(dsn, timeout),
    )
    if engine.dialect.name == "sqlite":
        # SQLite leaves foreign keys unenforced unless asked, per connection
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    database = Database(engine)

    try:
        database.ping()
    except SQLAlchemyError as exc:
        engine.dispose()
        logger.error("Database ping failed", database=engine.url.database, error=str(exc))
        raise DatabaseConnectionError(details={"database": engine.url.database}) from exc

    logger.info("Pinged database successfully", database=engine.url.database)
    return database


def get_db(request: Request) -> Generator[Session, None, None]:
    """One session per request, taken from the application's pool."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
