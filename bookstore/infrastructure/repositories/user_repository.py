"""
SQLAlchemy Implementation of User Repository.
"""

from typing import List

from sqlalchemy import delete, select

from bookstore.core.exceptions import EntityNotFoundException
from bookstore.core.security import hash_password
from bookstore.domain.models.user import User
from bookstore.domain.repositories.user_repository import UserRepository
from bookstore.domain.schemas.auth import UserWrite
from bookstore.infrastructure.database import utcnow
from bookstore.infrastructure.repositories.base_repository import (
    SQLAlchemyRepository,
    translate_store_errors,
)

DUPLICATE_EMAIL = "a user with that email address already exists"


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    @translate_store_errors()
    def get_by_email(self, email: str) -> User:
        user = self.db.scalars(select(User).where(User.email == email)).first()
        if user is None:
            raise EntityNotFoundException("User not found", {"email": email})
        return user

    @translate_store_errors()
    def get_one(self, id: int) -> User:
        user = self.db.get(User, id)
        if user is None:
            raise EntityNotFoundException("User not found", {"user_id": id})
        return user

    @translate_store_errors()
    def get_all(self) -> List[User]:
        return list(self.db.scalars(select(User).order_by(User.last_name, User.id)))

    @translate_store_errors(DUPLICATE_EMAIL)
    def insert(self, user: UserWrite, password: str) -> int:
        now = utcnow()
        row = User(
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            password=hash_password(password),
            active=user.active,
            created_at=now,
            updated_at=now,
        )
        self.db.add(row)
        self.db.commit()
        return row.id

    @translate_store_errors(DUPLICATE_EMAIL)
    def update(self, user: UserWrite, commit: bool = True) -> User:
        row = self.get_one(user.id)
        row.email = user.email
        row.first_name = user.first_name
        row.last_name = user.last_name
        row.active = user.active
        row.updated_at = utcnow()
        if commit:
            self.db.commit()
        return row

    @translate_store_errors(DUPLICATE_EMAIL)
    def save(self, user: User) -> User:
        user.updated_at = utcnow()
        self.db.commit()
        return user

    @translate_store_errors()
    def reset_password(self, id: int, password: str, commit: bool = True) -> None:
        row = self.get_one(id)
        row.password = hash_password(password)
        row.updated_at = utcnow()
        if commit:
            self.db.commit()

    @translate_store_errors("user still has open sessions")
    def delete_by_id(self, id: int) -> None:
        self.db.execute(delete(User).where(User.id == id))
        self.db.commit()
