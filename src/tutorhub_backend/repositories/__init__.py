from .base import BaseRepository, RepositoryError, NotFoundError, DuplicateError
from .course import CourseRepository, ExerciseRepository
from .grading_criterion import GradingCriterionRepository
from .system_notification import SystemNotificationRepository
from .team import TeamRepository
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "CourseRepository",
    "ExerciseRepository",
    "GradingCriterionRepository",
    "SystemNotificationRepository",
    "TeamRepository",
    "UserRepository",
]
