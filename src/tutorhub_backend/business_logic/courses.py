"""Business logic for resolving courses and exercises."""

import logging

from sqlalchemy.orm import Session

from tutorhub_backend.exceptions import CourseNotFoundException, ExerciseNotFoundException
from tutorhub_backend.model.course import Course, Exercise
from tutorhub_backend.repositories.course import CourseRepository, ExerciseRepository

logger = logging.getLogger(__name__)


def get_course(course_id: int, db: Session) -> Course:
    """
    Get a course by id.

    Raises:
        CourseNotFoundException: If the course does not exist
    """
    course = CourseRepository(db).get_by_id_optional(course_id)
    if course is None:
        raise CourseNotFoundException(detail=f"Course {course_id} not found")
    return course


def get_exercise(exercise_id: int, db: Session) -> Exercise:
    """
    Get an exercise by id, with its course loaded for role checks.

    Raises:
        ExerciseNotFoundException: If the exercise does not exist
    """
    exercise = ExerciseRepository(db).find_one_with_course(exercise_id)
    if exercise is None:
        raise ExerciseNotFoundException(detail=f"Exercise {exercise_id} not found")
    return exercise
