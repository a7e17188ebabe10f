"""Grading criterion repository for direct database access."""

from typing import List
from sqlalchemy.orm import Session, selectinload

from .base import BaseRepository
from ..model.grading import GradingCriterion


class GradingCriterionRepository(BaseRepository[GradingCriterion]):
    """Repository for GradingCriterion entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db, GradingCriterion)

    def find_all_by_exercise_id(self, exercise_id: int) -> List[GradingCriterion]:
        """Find all grading criteria of an exercise, without their instructions."""
        return (
            self.db.query(GradingCriterion)
            .filter(GradingCriterion.exercise_id == exercise_id)
            .order_by(GradingCriterion.id)
            .all()
        )

    def find_all_by_exercise_id_with_eager_instructions(self, exercise_id: int) -> List[GradingCriterion]:
        """
        Find all grading criteria of an exercise with their structured grading instructions.

        Instructions are ordered by id within each criterion.
        """
        return (
            self.db.query(GradingCriterion)
            .options(selectinload(GradingCriterion.structured_grading_instructions))
            .filter(GradingCriterion.exercise_id == exercise_id)
            .order_by(GradingCriterion.id)
            .all()
        )
