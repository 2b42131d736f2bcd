"""
Base Repository Interface.
Defines the contract shared by every entity repository.
"""

from typing import TypeVar, Optional, Protocol

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for lookups shared by all entity families."""

    def get_by_id(self, id: int) -> Optional[T]:
        """Get a single row by ID, or None."""
        ...
