"""
Token Repository Interface.
"""

from datetime import datetime
from typing import Optional

from bookstore.domain.repositories.base import BaseRepository
from bookstore.domain.models.token import Token
from bookstore.domain.models.user import User


class TokenRepository(BaseRepository[Token]):
    """Interface for session token persistence. Only token hashes are stored."""

    def insert(self, token_hash: str, user: User, expiry: datetime) -> Token:
        ...

    def get_valid_user(self, token_hash: str, now: datetime) -> Optional[User]:
        """Owner of an unexpired token row whose user is active, or None."""
        ...

    def delete_by_hash(self, token_hash: str) -> None:
        """Raises EntityNotFoundException when no row matches."""
        ...

    def delete_for_user(self, user_id: int, commit: bool = True) -> int:
        """Delete every token of a user and return how many were removed.

        With commit=False the deletion joins the session's open transaction.
        """
        ...

    def delete_expired(self, now: datetime) -> int:
        ...
