"""
User Repository Interface.
"""

from typing import List

from bookstore.domain.repositories.base import BaseRepository
from bookstore.domain.models.user import User
from bookstore.domain.schemas.auth import UserWrite


class UserRepository(BaseRepository[User]):
    """Interface for User operations."""

    def get_by_email(self, email: str) -> User:
        """Get a user by email. Raises EntityNotFoundException."""
        ...

    def get_one(self, id: int) -> User:
        """Get a user by id. Raises EntityNotFoundException."""
        ...

    def get_all(self) -> List[User]:
        """All users ordered by last name."""
        ...

    def insert(self, user: UserWrite, password: str) -> int:
        """Create a user and return its id. Raises ValidationException on a duplicate email."""
        ...

    def update(self, user: UserWrite, commit: bool = True) -> User:
        """Overwrite email, names and active flag. The password is never touched.

        With commit=False the change waits for a later `save`.
        """
        ...

    def save(self, user: User) -> User:
        """Commit pending changes to a loaded user, with any other work in the same session."""
        ...

    def reset_password(self, id: int, password: str, commit: bool = True) -> None:
        """Replace the stored credential with the hash of `password`."""
        ...

    def delete_by_id(self, id: int) -> None:
        """Hard delete. Tokens are left for the caller to revoke."""
        ...
