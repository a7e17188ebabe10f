"""API endpoints for reading the grading criteria of an exercise."""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tutorhub_backend.business_logic.courses import get_exercise
from tutorhub_backend.business_logic.users import get_user_with_groups_and_authorities
from tutorhub_backend.database import get_db
from tutorhub_backend.exceptions import InsufficientCourseRoleException
from tutorhub_backend.permissions.core import STAFF_ROLES, CourseRole, check_course_role
from tutorhub_backend.permissions.guards import enforce, require_roles
from tutorhub_backend.permissions.principal import Principal
from tutorhub_backend.repositories.grading_criterion import GradingCriterionRepository
from tutorhub_types.grading_criteria import GradingCriterionGet

logger = logging.getLogger(__name__)

grading_criteria_router = APIRouter(tags=["grading-criteria"])


@grading_criteria_router.get(
    "/exercises/{exercise_id}/grading-criteria",
    response_model=List[GradingCriterionGet],
)
async def list_grading_criteria(
    exercise_id: int,
    principal: Principal = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
) -> List[GradingCriterionGet]:
    """Grading criteria of an exercise with their structured grading instructions."""
    exercise = get_exercise(exercise_id, db)
    user = get_user_with_groups_and_authorities(principal, db)
    enforce(
        check_course_role(user, exercise.course, CourseRole.TEACHING_ASSISTANT),
        principal,
        InsufficientCourseRoleException,
    )

    criteria = GradingCriterionRepository(db).find_all_by_exercise_id_with_eager_instructions(exercise_id)
    return [GradingCriterionGet.model_validate(criterion) for criterion in criteria]
