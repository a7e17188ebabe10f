"""Course and exercise repositories for direct database access."""

from typing import Optional
from sqlalchemy.orm import Session, joinedload

from .base import BaseRepository
from ..model.course import Course, Exercise


class CourseRepository(BaseRepository[Course]):
    """Repository for Course entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db, Course)


class ExerciseRepository(BaseRepository[Exercise]):
    """Repository for Exercise entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db, Exercise)

    def find_one_with_course(self, exercise_id: int) -> Optional[Exercise]:
        """
        Find an exercise with its course loaded.

        Course role checks always need the course, so most callers use this
        lookup instead of get_by_id_optional.
        """
        return (
            self.db.query(Exercise)
            .options(joinedload(Exercise.course))
            .filter(Exercise.id == exercise_id)
            .first()
        )
