"""Auth service — credential checks and the opaque session token lifecycle."""

import base64
import hashlib
import secrets
from datetime import datetime, timedelta, timezone

import structlog

from bookstore.core.exceptions import (
    AccountInactiveException,
    EntityNotFoundException,
    InvalidCredentialsException,
    InvalidTokenException,
)
from bookstore.core.security import verify_password
from bookstore.domain.models.user import User
from bookstore.domain.repositories.token_repository import TokenRepository
from bookstore.domain.repositories.user_repository import UserRepository
from bookstore.domain.schemas.auth import TokenRead

logger = structlog.get_logger(__name__)

TOKEN_BYTES = 16


def hash_token(plaintext: str) -> str:
    return hashlib.sha256(plaintext.encode("utf-8")).hexdigest()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def authenticate(users: UserRepository, email: str, password: str) -> User:
    """Return the active user owning these credentials.

    Unknown email and wrong password raise the same InvalidCredentialsException.
    """
    try:
        user = users.get_by_email(email)
    except EntityNotFoundException:
        raise InvalidCredentialsException() from None

    if not verify_password(password, user.password):
        raise InvalidCredentialsException()
    if not user.active:
        raise AccountInactiveException()
    return user


def issue_token(tokens: TokenRepository, user: User, ttl: timedelta) -> TokenRead:
    """Create and persist a session token for `user`.

    The plaintext is returned only here; the store keeps its SHA-256 digest.
    """
    plaintext = base64.b32encode(secrets.token_bytes(TOKEN_BYTES)).decode("ascii").rstrip("=")
    expiry = _now() + ttl
    tokens.insert(hash_token(plaintext), user, expiry)
    logger.info("Token issued", user_id=user.id, expiry=expiry.isoformat())
    return TokenRead(token=plaintext, user_id=user.id, expiry=expiry)


def revoke(tokens: TokenRepository, plaintext: str) -> None:
    """Delete the token. Raises EntityNotFoundException if it is unknown."""
    tokens.delete_by_hash(hash_token(plaintext))


def revoke_all_for_user(tokens: TokenRepository, user_id: int) -> int:
    removed = tokens.delete_for_user(user_id)
    logger.info("Tokens revoked", user_id=user_id, count=removed)
    return removed


def validate(tokens: TokenRepository, plaintext: str) -> bool:
    """True when the token is known, unexpired and owned by an active user.

    Store failures propagate as StoreException instead of reading as False.
    """
    if not plaintext:
        return False
    return tokens.get_valid_user(hash_token(plaintext), _now()) is not None


def user_for_token(tokens: TokenRepository, plaintext: str) -> User:
    """Owner of a valid token, for authenticated routes."""
    user = tokens.get_valid_user(hash_token(plaintext), _now()) if plaintext else None
    if user is None:
        raise InvalidTokenException()
    return user


def log_out_and_deactivate(users: UserRepository, tokens: TokenRepository, user_id: int) -> User:
    """Set the user inactive and revoke every session it holds, atomically."""
    user = users.get_one(user_id)
    user.active = False
    tokens.delete_for_user(user_id, commit=False)
    users.save(user)
    logger.info("User logged out and deactivated", user_id=user_id)
    return user


def purge_expired(tokens: TokenRepository) -> int:
    """Remove expired token rows. Expiry is otherwise only checked on use."""
    removed = tokens.delete_expired(_now())
    logger.info("Expired tokens purged", count=removed)
    return removed
