"""
Base Repository - Abstract repository pattern implementation.

Provides the read helpers shared by every lineage document repository.
The lineage subsystem never writes; persistence of documents belongs to
their CRUD modules.
"""
from abc import ABC, abstractmethod
from typing import Generic, TypeVar, List, Optional, Type

from sqlalchemy.orm import Session

from backoffice.models import Base

T = TypeVar('T', bound=Base)

LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """
    Build a LIKE pattern matching `term` anywhere, with wildcards escaped.

    Args:
        term: Free-text search term

    Returns:
        Pattern for use with ilike(..., escape=LIKE_ESCAPE)
    """
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


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

    def get_by_id(self, entity_id: str) -> Optional[T]:
        """
        Retrieve an entity by its primary key.

        Args:
            entity_id: Primary key value

        Returns:
            The entity if found, None otherwise
        """
        return self.session.query(self.model_class).filter(
            self.model_class.id == entity_id
        ).first()

    @abstractmethod
    def search(self, term: str, limit: int) -> List[T]:
        """
        Find documents whose number or client name contains the term.

        Args:
            term: Case-insensitive search term
            limit: Maximum number of rows

        Returns:
            Matching entities, newest first
        """
        pass
