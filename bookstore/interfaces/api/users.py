"""User admin API routes — list, upsert, delete, force logout."""

from fastapi import APIRouter, Depends, status

from bookstore.application.services import auth_service, user_service
from bookstore.domain.repositories.token_repository import TokenRepository
from bookstore.domain.repositories.user_repository import UserRepository
from bookstore.domain.schemas.auth import IdRequest, UserRead, UserWrite
from bookstore.interfaces.api.deps import get_current_user
from bookstore.interfaces.api.envelope import envelope
from bookstore.interfaces.deps import get_token_repository, get_user_repository

router = APIRouter(prefix="/users", tags=["Users"], dependencies=[Depends(get_current_user)])


@router.get("")
def all_users(users: UserRepository = Depends(get_user_repository)):
    return envelope("success", {"users": [UserRead.model_validate(u) for u in users.get_all()]})


@router.post("", status_code=status.HTTP_202_ACCEPTED)
def edit_user(body: UserWrite, users: UserRepository = Depends(get_user_repository)):
    user_id = user_service.save_user(users, body)
    return envelope("Changes saved", {"id": user_id})


@router.get("/{user_id}")
def get_user(user_id: int, users: UserRepository = Depends(get_user_repository)):
    return envelope("success", UserRead.model_validate(users.get_one(user_id)))


@router.delete("")
def delete_user(
    body: IdRequest,
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenRepository = Depends(get_token_repository),
):
    user_service.delete_user(users, tokens, body.id)
    return envelope("User deleted")


@router.post("/{user_id}/logout", status_code=status.HTTP_202_ACCEPTED)
def log_user_out_and_set_inactive(
    user_id: int,
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenRepository = Depends(get_token_repository),
):
    auth_service.log_out_and_deactivate(users, tokens, user_id)
    return envelope("user logged out and set to inactive")
