"""FastAPI dependency — bearer token auth for admin routes."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bookstore.application.services.auth_service import user_for_token
from bookstore.core.exceptions import InvalidTokenException
from bookstore.domain.models.user import User
from bookstore.domain.repositories.token_repository import TokenRepository
from bookstore.interfaces.deps import get_token_repository

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenRepository = Depends(get_token_repository),
) -> User:
    """Resolve the bearer token to an active user."""
    if credentials is None:
        raise InvalidTokenException("no authorization token supplied")
    return user_for_token(tokens, credentials.credentials)
