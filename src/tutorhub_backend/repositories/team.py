"""
Team repository for direct database access.

Lookups come in two flavours: the shallow ones return teams without their
students, the "with_eager_students" ones load the students in the same
round trip.
"""

from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from .base import BaseRepository
from ..model.auth import User
from ..model.course import Team, team_student


class TeamRepository(BaseRepository[Team]):
    """Repository for Team entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db, Team)

    def find_one_with_eager_students(self, team_id: int) -> Optional[Team]:
        """
        Find a team by id with its students loaded.

        Args:
            team_id: Team identifier

        Returns:
            Team if found, None otherwise
        """
        return (
            self.db.query(Team)
            .options(selectinload(Team.students))
            .filter(Team.id == team_id)
            .first()
        )

    def find_all_by_exercise_id(self, exercise_id: int) -> List[Team]:
        """Find all teams of an exercise without their students."""
        return self.db.query(Team).filter(Team.exercise_id == exercise_id).all()

    def find_all_by_exercise_id_with_eager_students(self, exercise_id: int) -> List[Team]:
        """Find all teams of an exercise with their students loaded."""
        return (
            self.db.query(Team)
            .options(selectinload(Team.students))
            .filter(Team.exercise_id == exercise_id)
            .all()
        )

    def find_one_by_short_name(self, short_name: str) -> Optional[Team]:
        """
        Find a team by its short name.

        Short names are unique across all exercises, so this lookup is not
        scoped to an exercise.
        """
        return self.find_one_by(short_name=short_name)

    def exists_by_short_name(self, short_name: str) -> bool:
        return self.db.query(
            self.db.query(Team).filter(Team.short_name == short_name).exists()
        ).scalar()

    def find_assigned_team_ids(self, exercise_id: int, user_ids: List[int]) -> dict[int, int]:
        """
        Map user ids to the id of the team they belong to in an exercise.

        Users without a team in the exercise are absent from the result.
        """
        if not user_ids:
            return {}

        rows = (
            self.db.query(team_student.c.student_id, Team.id)
            .join(Team, Team.id == team_student.c.team_id)
            .filter(
                Team.exercise_id == exercise_id,
                team_student.c.student_id.in_(user_ids),
            )
            .all()
        )
        return {student_id: team_id for student_id, team_id in rows}

    def find_students_assigned_to_other_teams(
        self,
        exercise_id: int,
        user_ids: List[int],
        team_id: Optional[int] = None,
    ) -> List[User]:
        """
        Find those of the given users that already belong to another team of the exercise.

        Args:
            exercise_id: Exercise whose teams are checked
            user_ids: Candidate student ids
            team_id: Team to ignore (the team being updated), if any
        """
        if not user_ids:
            return []

        query = (
            self.db.query(User)
            .join(team_student, team_student.c.student_id == User.id)
            .join(Team, Team.id == team_student.c.team_id)
            .filter(
                Team.exercise_id == exercise_id,
                User.id.in_(user_ids),
            )
        )
        if team_id is not None:
            query = query.filter(Team.id != team_id)
        return query.distinct().all()
