"""
Base Repository - Abstract repository pattern implementation.

Provides common query helpers for all entities.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Generic, TypeVar, Optional, Type
from sqlalchemy.orm import Session

from jobcost.models import Base

T = TypeVar('T', bound=Base)


def cents_to_decimal(cents: Optional[int]) -> Optional[Decimal]:
    """Integer cents from the store -> exact Decimal dollars."""
    if cents is None:
        return None
    return Decimal(cents) / 100


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common data access operations.

    Type Parameters:
        T: The SQLAlchemy model type this repository manages
    """

    def __init__(self, session: Session, model_class: Type[T]):
        """
        Initialize the repository.

        Args:
            session: SQLAlchemy database session
            model_class: The model class this repository manages
        """
        self.session = session
        self.model_class = model_class

    def count(self) -> int:
        """Count total entities."""
        return self.session.query(self.model_class).count()

    def add(self, entity: T) -> T:
        """Add a new entity to the session."""
        self.session.add(entity)
        return entity

    def commit(self) -> None:
        """Commit the current transaction."""
        self.session.commit()

    def rollback(self) -> None:
        """Rollback the current transaction."""
        self.session.rollback()

    def flush(self) -> None:
        """Flush pending changes to the database."""
        self.session.flush()

    @abstractmethod
    def exists(self, **criteria) -> bool:
        """
        Check if an entity matching the criteria exists.

        Args:
            **criteria: Field-value pairs to match

        Returns:
            True if entity exists, False otherwise
        """
        pass
