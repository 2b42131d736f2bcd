"""
SQLAlchemy implementation of the Base Repository.
"""

import functools
from typing import Callable, Generic, Optional, Type, TypeVar

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bookstore.core.exceptions import StoreException, ValidationException
from bookstore.domain.repositories.base import BaseRepository
from bookstore.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)

logger = structlog.get_logger(__name__)


def translate_store_errors(integrity_message: str = "Constraint violation") -> Callable:
    """Roll back and re-raise SQLAlchemy failures as application errors.

    Constraint violations become ValidationException, anything else the store
    raises becomes StoreException. The original error is chained.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except IntegrityError as exc:
                self.db.rollback()
                raise ValidationException(integrity_message) from exc
            except SQLAlchemyError as exc:
                self.db.rollback()
                logger.error("Store operation failed", operation=func.__qualname__, error=str(exc))
                raise StoreException() from exc
        return wrapper
    return decorator


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    @translate_store_errors()
    def get_by_id(self, id: int) -> Optional[ModelType]:
        return self.db.get(self.model, id)
