"""Maintenance commands installed as console scripts."""

from typing import Optional

from bookstore.application.services.auth_service import purge_expired
from bookstore.config import Settings, get_settings
from bookstore.core.logging import configure_logging
from bookstore.domain.models.token import Token
from bookstore.infrastructure.database import connect
from bookstore.infrastructure.repositories.token_repository import SQLAlchemyTokenRepository


def purge_tokens(settings: Optional[Settings] = None) -> int:
    """Delete expired session tokens. Expiry is otherwise only checked on use,
    so run this from cron to keep the tokens table small."""
    settings = settings or get_settings()
    configure_logging(settings)

    database = connect(settings.DATABASE_URL, timeout=settings.DB_TIMEOUT_SECONDS)
    try:
        with database.session() as db:
            removed = purge_expired(SQLAlchemyTokenRepository(db, Token))
    finally:
        database.dispose()

    print(f"Removed {removed} expired token(s).")
    return removed


def main() -> None:
    purge_tokens()


if __name__ == "__main__":
    main()
