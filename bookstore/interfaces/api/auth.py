"""Auth API routes — login, logout, token validation."""

from datetime import timedelta

import structlog
from fastapi import APIRouter, Depends, Request

from bookstore.application.services import auth_service
from bookstore.domain.repositories.token_repository import TokenRepository
from bookstore.domain.repositories.user_repository import UserRepository
from bookstore.domain.schemas.auth import LoginData, LoginRequest, TokenRequest, UserRead
from bookstore.interfaces.api.envelope import envelope
from bookstore.interfaces.deps import get_token_repository, get_user_repository

router = APIRouter(tags=["Auth"])
logger = structlog.get_logger(__name__)


@router.post("/login")
def login(
    body: LoginRequest,
    request: Request,
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenRepository = Depends(get_token_repository),
):
    user = auth_service.authenticate(users, body.email, body.password)

    ttl = timedelta(hours=request.app.state.settings.TOKEN_TTL_HOURS)
    token = auth_service.issue_token(tokens, user, ttl)
    logger.info("User logged in", user_id=user.id)

    return envelope(
        "logged in",
        LoginData(token=token, user=UserRead.model_validate(user)),
    )


@router.post("/logout")
def logout(body: TokenRequest, tokens: TokenRepository = Depends(get_token_repository)):
    auth_service.revoke(tokens, body.token)
    return envelope("logged out")


@router.post("/validate-token")
def validate_token(body: TokenRequest, tokens: TokenRepository = Depends(get_token_repository)):
    return envelope(data=auth_service.validate(tokens, body.token))
