"""Business logic for saving teams and searching users for team formation."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from tutorhub_backend.exceptions import BadRequestException, ConflictException
from tutorhub_backend.model.course import Course, Exercise, Team
from tutorhub_backend.repositories.base import DuplicateError
from tutorhub_backend.repositories.team import TeamRepository
from tutorhub_backend.repositories.user import UserRepository
from tutorhub_types.teams import TeamBody, TeamSearchUser

logger = logging.getLogger(__name__)

ENTITY_NAME = "team"


def save_team(
    exercise: Exercise,
    team_data: TeamBody,
    db: Session,
    team: Optional[Team] = None,
) -> Team:
    """
    Create a new team for an exercise or apply changes to an existing one.

    Rules enforced here:
    - every referenced student and the owner must exist
    - a student belongs to at most one team per exercise
    - the short name is unique across all exercises

    Args:
        exercise: Exercise the team belongs to
        team_data: Team as sent by the client
        db: Database session
        team: Existing team when updating, None when creating

    Returns:
        The persisted team

    Raises:
        BadRequestException: Unknown users or students already assigned elsewhere
        ConflictException: Short name already taken by another team
    """
    team_repository = TeamRepository(db)
    user_repository = UserRepository(db)

    student_ids = list(dict.fromkeys(student.id for student in team_data.students if student.id is not None))
    students = user_repository.find_all_by_ids(student_ids)

    missing_ids = sorted(set(student_ids) - {student.id for student in students})
    if missing_ids:
        raise BadRequestException(
            detail=f"Unknown student ids: {missing_ids}",
            context={"error_key": "studentsNotFound", "entity_name": ENTITY_NAME},
        )

    conflicting = team_repository.find_students_assigned_to_other_teams(
        exercise.id, student_ids, team.id if team is not None else None
    )
    if conflicting:
        logins = sorted(student.login for student in conflicting)
        raise BadRequestException(
            detail=f"Students already assigned to another team of this exercise: {', '.join(logins)}",
            context={
                "error_key": "studentsAlreadyAssigned",
                "entity_name": ENTITY_NAME,
                "conflicting_logins": logins,
            },
        )

    same_short_name = team_repository.find_one_by_short_name(team_data.short_name)
    if same_short_name is not None and (team is None or same_short_name.id != team.id):
        raise ConflictException(
            detail=f"A team with short name '{team_data.short_name}' already exists",
            context={"error_key": "teamShortNameTaken", "entity_name": ENTITY_NAME},
        )

    owner = None
    if team_data.owner is not None and team_data.owner.id is not None:
        owner = user_repository.get_by_id_optional(team_data.owner.id)
        if owner is None:
            raise BadRequestException(
                detail=f"Unknown owner id: {team_data.owner.id}",
                context={"error_key": "ownerNotFound", "entity_name": ENTITY_NAME},
            )

    creating = team is None
    if creating:
        team = Team(exercise_id=exercise.id)

    team.name = team_data.name
    team.short_name = team_data.short_name
    team.image = team_data.image
    team.owner = owner
    team.students = students

    try:
        if creating:
            team = team_repository.create(team)
        else:
            team = team_repository.update(team)
    except DuplicateError as e:
        # Another request took the short name between the check and the write
        raise ConflictException(
            detail=f"A team with short name '{team_data.short_name}' already exists",
            context={"error_key": "teamShortNameTaken", "entity_name": ENTITY_NAME},
        ) from e

    logger.info(
        f"{'Created' if creating else 'Updated'} team {team.id} ('{team.short_name}') "
        f"for exercise {exercise.id} with {len(students)} student(s)"
    )
    return team


def search_by_login_or_name_in_course_for_exercise_team(
    course: Course,
    exercise: Exercise,
    login_or_name: str,
    db: Session,
) -> List[TeamSearchUser]:
    """
    Search the students of a course by login or name for forming teams of an exercise.

    Each result carries the id of the exercise team the student already
    belongs to, so clients can tell who is still available.
    """
    if not course.student_group_name:
        return []

    users = UserRepository(db).search_by_login_or_name_in_group(course.student_group_name, login_or_name)
    assigned = TeamRepository(db).find_assigned_team_ids(exercise.id, [user.id for user in users])

    return [
        TeamSearchUser(
            id=user.id,
            login=user.login,
            name=user.name or None,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            assigned_team_id=assigned.get(user.id),
        )
        for user in users
    ]
