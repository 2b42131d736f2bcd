"""
SQLAlchemy Implementation of Token Repository.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select

from bookstore.core.exceptions import EntityNotFoundException
from bookstore.domain.models.token import Token
from bookstore.domain.models.user import User
from bookstore.domain.repositories.token_repository import TokenRepository
from bookstore.infrastructure.repositories.base_repository import (
    SQLAlchemyRepository,
    translate_store_errors,
)


class SQLAlchemyTokenRepository(SQLAlchemyRepository[Token], TokenRepository):
    """Token repository implementation using SQLAlchemy."""

    @translate_store_errors()
    def insert(self, token_hash: str, user: User, expiry: datetime) -> Token:
        row = Token(
            user_id=user.id,
            email=user.email,
            token_hash=token_hash,
            expiry=expiry,
        )
        self.db.add(row)
        self.db.commit()
        return row

    @translate_store_errors()
    def get_valid_user(self, token_hash: str, now: datetime) -> Optional[User]:
        stmt = (
            select(User)
            .join(Token, Token.user_id == User.id)
            .where(
                Token.token_hash == token_hash,
                Token.expiry > now,
                User.active.is_(True),
            )
        )
        return self.db.scalars(stmt).first()

    @translate_store_errors()
    def delete_by_hash(self, token_hash: str) -> None:
        result = self.db.execute(delete(Token).where(Token.token_hash == token_hash))
        self.db.commit()
        if result.rowcount == 0:
            raise EntityNotFoundException("Token not found")

    @translate_store_errors()
    def delete_for_user(self, user_id: int, commit: bool = True) -> int:
        result = self.db.execute(delete(Token).where(Token.user_id == user_id))
        if commit:
            self.db.commit()
        return result.rowcount

    @translate_store_errors()
    def delete_expired(self, now: datetime) -> int:
        result = self.db.execute(delete(Token).where(Token.expiry <= now))
        self.db.commit()
        return result.rowcount
