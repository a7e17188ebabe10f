"""
Base repository pattern implementation.

Repositories are a thin store-and-retrieve layer over SQLAlchemy sessions:
they perform no business validation, and absence is reported as None or an
empty list rather than an exception.
"""

from abc import ABC
from typing import TypeVar, Generic, List, Optional, Dict, Any, Type
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

# Type variable for generic entity type
T = TypeVar('T')


class RepositoryError(Exception):
    """Base exception for repository operations."""
    pass


class NotFoundError(RepositoryError):
    """Exception raised when entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateError(RepositoryError):
    """Exception raised when a write violates a unique constraint."""

    def __init__(self, entity_type: str, criteria: Dict[str, Any]):
        super().__init__(f"{entity_type} already exists with criteria: {criteria}")
        self.entity_type = entity_type
        self.criteria = criteria


def is_unique_violation(error: IntegrityError) -> bool:
    """Whether an integrity error comes from a unique constraint (not FK or NOT NULL)."""
    # 23505 is unique_violation on PostgreSQL
    if getattr(error.orig, "pgcode", None) == "23505":
        return True
    return "unique constraint" in str(error.orig).lower()


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common database operations.

    Subclasses bind the model class and add their specialized queries.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize repository with database session and model class.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: Any) -> T:
        """
        Get entity by ID.

        Raises:
            NotFoundError: If entity not found
        """
        entity = self.get_by_id_optional(entity_id)
        if entity is None:
            raise NotFoundError(self.model.__name__, entity_id)
        return entity

    def get_by_id_optional(self, entity_id: Any) -> Optional[T]:
        """Get entity by ID, returning None if not found."""
        if entity_id is None:
            return None
        return self.db.query(self.model).filter(
            self.model.id == entity_id
        ).first()

    def find_by(self, **filters) -> List[T]:
        """Find all entities whose columns equal the given values."""
        query = self.db.query(self.model)
        for key, value in filters.items():
            query = query.filter(getattr(self.model, key) == value)
        return query.all()

    def find_one_by(self, **filters) -> Optional[T]:
        """Find the first entity whose columns equal the given values."""
        query = self.db.query(self.model)
        for key, value in filters.items():
            query = query.filter(getattr(self.model, key) == value)
        return query.first()

    def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[T]:
        """List entities with optional pagination, ordered by id."""
        query = self.db.query(self.model).order_by(self.model.id)
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def exists(self, entity_id: Any) -> bool:
        """Check if entity exists by ID."""
        return self.db.query(
            self.db.query(self.model).filter(self.model.id == entity_id).exists()
        ).scalar()

    def create(self, entity: T) -> T:
        """
        Persist a new entity.

        Returns:
            Created entity with generated fields (e.g., ID) populated

        Raises:
            DuplicateError: If entity violates unique constraints
            RepositoryError: If database operation fails
        """
        return self._persist(entity, "create")

    def update(self, entity: T) -> T:
        """
        Persist changes of an already loaded entity.

        Raises:
            DuplicateError: If the changes violate unique constraints
            RepositoryError: If database operation fails
        """
        return self._persist(entity, "update")

    def delete(self, entity: T) -> None:
        """
        Delete an entity.

        Raises:
            RepositoryError: If deletion fails
        """
        try:
            self.db.delete(entity)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Failed to delete {self.model.__name__}: {str(e)}") from e

    def _persist(self, entity: T, operation: str) -> T:
        # Rollback expires the entity, so take the values first
        snapshot = self._extract_entity_dict(entity)
        try:
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)
            return entity
        except IntegrityError as e:
            self.db.rollback()
            if is_unique_violation(e):
                raise DuplicateError(self.model.__name__, snapshot) from e
            raise RepositoryError(f"Failed to {operation} {self.model.__name__}: {str(e.orig)}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Failed to {operation} {self.model.__name__}: {str(e)}") from e

    def _extract_entity_dict(self, entity: T) -> Dict[str, Any]:
        """Column values of an entity, used for error reporting."""
        return {
            column.name: getattr(entity, column.name, None)
            for column in entity.__table__.columns
        }
