"""User service — upsert, deletion and the default admin account."""

import structlog

from bookstore.core.exceptions import EntityNotFoundException, InvalidInputException
from bookstore.domain.repositories.token_repository import TokenRepository
from bookstore.domain.repositories.user_repository import UserRepository
from bookstore.domain.schemas.auth import UserWrite

logger = structlog.get_logger(__name__)


def save_user(users: UserRepository, payload: UserWrite) -> int:
    """Create the user when `id == 0`, otherwise edit it in place.

    A non-empty password on edit resets the credential.
    """
    if payload.id == 0:
        if not payload.password:
            raise InvalidInputException("a password is required for new users")
        user_id = users.insert(payload, payload.password)
        logger.info("User created", user_id=user_id)
        return user_id

    # Profile and credential land in one commit
    user = users.update(payload, commit=False)
    if payload.password:
        users.reset_password(user.id, payload.password, commit=False)
    users.save(user)
    logger.info("User updated", user_id=payload.id, password_reset=bool(payload.password))
    return payload.id


def delete_user(users: UserRepository, tokens: TokenRepository, user_id: int) -> None:
    """Revoke the user's sessions, then remove the row."""
    users.get_one(user_id)
    tokens.delete_for_user(user_id)
    users.delete_by_id(user_id)
    logger.info("User deleted", user_id=user_id)


def ensure_default_admin(users: UserRepository, email: str, password: str) -> None:
    if not email:
        return
    try:
        users.get_by_email(email)
    except EntityNotFoundException:
        users.insert(UserWrite(email=email, first_name="Admin", last_name="User", active=True), password)
        logger.info("Default admin user created", email=email)
