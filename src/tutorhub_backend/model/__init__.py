from .base import Base, metadata
from .auth import User, UserGroup, UserRole
from .course import Course, Exercise, Team, team_student
from .grading import GradingCriterion, StructuredGradingInstruction
from .notification import SystemNotification

# Import all models to ensure relationships are properly set up
from . import (
    auth,
    course,
    grading,
    notification,
)

__all__ = [
    'Base',
    'metadata',
    # Auth models
    'User',
    'UserGroup',
    'UserRole',
    # Course models
    'Course',
    'Exercise',
    'Team',
    'team_student',
    # Grading
    'GradingCriterion',
    'StructuredGradingInstruction',
    # Notifications
    'SystemNotification',
]
