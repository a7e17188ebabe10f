"""API endpoints for instructor-side team management of team exercises."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response, status
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from tutorhub_backend.business_logic.courses import get_course, get_exercise
from tutorhub_backend.business_logic.teams import (
    save_team,
    search_by_login_or_name_in_course_for_exercise_team,
)
from tutorhub_backend.business_logic.users import get_user_with_groups_and_authorities
from tutorhub_backend.database import get_db
from tutorhub_backend.exceptions import (
    BadRequestException,
    InsufficientCourseRoleException,
    InvalidFieldFormatException,
    MissingFieldException,
    NotFoundException,
)
from tutorhub_backend.model.course import Team
from tutorhub_backend.permissions.auth import get_current_principal
from tutorhub_backend.permissions.core import (
    ALL_ROLES,
    STAFF_ROLES,
    CourseRole,
    check_course_role,
    check_role_gate,
    check_team_access,
)
from tutorhub_backend.permissions.guards import enforce, require_roles
from tutorhub_backend.permissions.principal import Principal
from tutorhub_backend.repositories.team import TeamRepository
from tutorhub_backend.settings import settings
from tutorhub_backend.utils.alerts import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
)
from tutorhub_types.teams import TeamBody, TeamGet, TeamSearchUser

logger = logging.getLogger(__name__)

ENTITY_NAME = "team"
MIN_SEARCH_LENGTH = 3

# Initialize rate limiter for this router
limiter = Limiter(key_func=get_remote_address)

teams_router = APIRouter(tags=["teams"])


def team_to_get(team: Team) -> TeamGet:
    """Convert a Team (with students loaded) to its DTO."""
    return TeamGet.model_validate(team)


def _wrong_exercise(detail: str) -> BadRequestException:
    return BadRequestException(
        detail=detail,
        context={"error_key": "wrongExerciseId", "entity_name": ENTITY_NAME},
    )


def _get_team_of_exercise(team_id: int, exercise_id: int, db: Session) -> Team:
    team = TeamRepository(db).find_one_with_eager_students(team_id)
    if team is None:
        raise NotFoundException(detail=f"Team {team_id} not found")
    if team.exercise_id != exercise_id:
        raise _wrong_exercise(f"Team {team_id} does not belong to exercise {exercise_id}")
    return team


def _require_teaching_assistant(principal: Principal, exercise, db: Session):
    user = get_user_with_groups_and_authorities(principal, db)
    enforce(
        check_course_role(user, exercise.course, CourseRole.TEACHING_ASSISTANT),
        principal,
        InsufficientCourseRoleException,
    )
    return user


@teams_router.post(
    "/exercises/{exercise_id}/teams",
    response_model=TeamGet,
    status_code=status.HTTP_201_CREATED,
)
async def create_team(
    exercise_id: int,
    team_data: TeamBody,
    response: Response,
    principal: Principal = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
) -> TeamGet:
    """
    Create a team for an exercise.

    The team must not carry an id and must reference the exercise of the path.
    Only teaching assistants, instructors and admins of the course may create teams.
    """
    logger.debug(f"REST request to create team '{team_data.short_name}' for exercise {exercise_id}")

    if team_data.id is not None:
        raise BadRequestException(
            detail="A new team cannot already have an id",
            context={"error_key": "idexists", "entity_name": ENTITY_NAME},
        )
    if team_data.exercise is None or team_data.exercise.id != exercise_id:
        raise _wrong_exercise("The team does not belong to the exercise of the path")

    exercise = get_exercise(exercise_id, db)
    _require_teaching_assistant(principal, exercise, db)

    team = save_team(exercise, team_data, db)

    response.headers["Location"] = f"/exercises/{exercise_id}/teams/{team.id}"
    response.headers.update(create_entity_creation_alert(ENTITY_NAME, str(team.id)))
    return team_to_get(team)


@teams_router.put("/exercises/{exercise_id}/teams", response_model=TeamGet)
async def update_team(
    exercise_id: int,
    team_data: TeamBody,
    response: Response,
    principal: Principal = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
) -> TeamGet:
    """Update an existing team; a team can never move to another exercise."""
    logger.debug(f"REST request to update team {team_data.id} of exercise {exercise_id}")

    if team_data.id is None:
        raise MissingFieldException(
            "id",
            detail="An updated team must have an id",
            context={"error_key": "idnull", "entity_name": ENTITY_NAME},
        )
    if team_data.exercise is None or team_data.exercise.id != exercise_id:
        raise _wrong_exercise("The team does not belong to the exercise of the path")

    existing = TeamRepository(db).find_one_with_eager_students(team_data.id)
    if existing is None:
        raise NotFoundException(detail=f"Team {team_data.id} not found")
    if existing.exercise_id != exercise_id:
        raise _wrong_exercise("A team cannot be moved to another exercise")

    exercise = get_exercise(exercise_id, db)
    _require_teaching_assistant(principal, exercise, db)

    team = save_team(exercise, team_data, db, team=existing)

    response.headers.update(create_entity_update_alert(ENTITY_NAME, str(team.id)))
    return team_to_get(team)


@teams_router.get("/exercises/{exercise_id}/teams/{team_id}", response_model=TeamGet)
async def get_team(
    exercise_id: int,
    team_id: int,
    principal: Principal = Depends(require_roles(*ALL_ROLES)),
    db: Session = Depends(get_db),
) -> TeamGet:
    """
    Get a team with its students.

    Course staff may read every team of the exercise, students only the team
    they are a member of.
    """
    team = _get_team_of_exercise(team_id, exercise_id, db)
    exercise = get_exercise(exercise_id, db)
    user = get_user_with_groups_and_authorities(principal, db)

    enforce(check_team_access(user, exercise, team), principal)
    return team_to_get(team)


@teams_router.get("/exercises/{exercise_id}/teams", response_model=List[TeamGet])
async def list_teams(
    exercise_id: int,
    principal: Principal = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
) -> List[TeamGet]:
    """All teams of an exercise with their students."""
    exercise = get_exercise(exercise_id, db)
    _require_teaching_assistant(principal, exercise, db)

    teams = TeamRepository(db).find_all_by_exercise_id_with_eager_students(exercise_id)
    return [team_to_get(team) for team in teams]


@teams_router.delete("/exercises/{exercise_id}/teams/{team_id}")
async def delete_team(
    exercise_id: int,
    team_id: int,
    response: Response,
    principal: Principal = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
) -> None:
    """Delete a team; its students stay untouched, only the memberships are removed."""
    team = _get_team_of_exercise(team_id, exercise_id, db)
    exercise = get_exercise(exercise_id, db)
    _require_teaching_assistant(principal, exercise, db)

    short_name = team.short_name
    TeamRepository(db).delete(team)

    logger.info(
        f"User {principal.login} deleted team {team_id} ('{short_name}') of exercise {exercise_id}"
    )
    response.headers.update(create_entity_deletion_alert(ENTITY_NAME, str(team_id)))


@teams_router.get("/teams", response_model=bool)
async def exists_team_by_short_name(
    short_name: str = Query(..., alias="shortName"),
    principal: Principal = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
) -> bool:
    """Check whether any team, of any exercise, already uses the short name."""
    return TeamRepository(db).exists_by_short_name(short_name)


@teams_router.get(
    "/courses/{course_id}/exercises/{exercise_id}/team-search-users",
    response_model=List[TeamSearchUser],
)
@limiter.limit(lambda: settings.TEAM_SEARCH_RATE_LIMIT)
async def search_users_in_course(
    request: Request,
    course_id: int,
    exercise_id: int,
    login_or_name: str = Query(..., alias="loginOrName"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> List[TeamSearchUser]:
    """
    Search the students of a course by login or name to form teams.

    The query must have at least three characters; this is checked before
    any role evaluation.
    """
    if len(login_or_name) < MIN_SEARCH_LENGTH:
        raise InvalidFieldFormatException(
            "loginOrName",
            f"at least {MIN_SEARCH_LENGTH} characters",
            detail=f"The search term must have at least {MIN_SEARCH_LENGTH} characters",
        )

    enforce(check_role_gate(principal, STAFF_ROLES), principal)

    course = get_course(course_id, db)
    exercise = get_exercise(exercise_id, db)
    if exercise.course_id != course.id:
        raise BadRequestException(
            detail=f"Exercise {exercise_id} does not belong to course {course_id}",
            context={"error_key": "wrongCourseId", "entity_name": ENTITY_NAME},
        )
    _require_teaching_assistant(principal, exercise, db)

    return search_by_login_or_name_in_course_for_exercise_team(course, exercise, login_or_name, db)
