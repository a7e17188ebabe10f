"""
Authorization policy.

Authorization is layered: a coarse role gate over the caller's authorities,
followed by fine-grained predicates over the caller and the resource (course
role tier, team membership). Every check is a pure function returning an
AuthorizationDecision; raising the matching HTTP error is left to the caller
(see permissions.guards).
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional

from tutorhub_backend.model.auth import User
from tutorhub_backend.model.course import Course, Exercise, Team
from tutorhub_backend.permissions.principal import Principal, authority_name


# Role gates used by the endpoints
STAFF_ROLES = ("TA", "INSTRUCTOR", "ADMIN")
ALL_ROLES = ("USER",) + STAFF_ROLES
ADMIN_ROLES = ("ADMIN",)


class CourseRole(IntEnum):
    """Ascending role tiers of a user within a course."""
    NONE = 0
    STUDENT = 1
    TEACHING_ASSISTANT = 2
    INSTRUCTOR = 3
    ADMIN = 4


@dataclass(frozen=True)
class AuthorizationDecision:
    allowed: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def allow(cls) -> "AuthorizationDecision":
        return cls(True)

    @classmethod
    def deny(cls, reason: str) -> "AuthorizationDecision":
        return cls(False, reason)


def check_role_gate(principal: Principal, allowed_roles: Iterable[str]) -> AuthorizationDecision:
    """Coarse gate: the caller must hold at least one of the allowed authorities."""
    allowed_roles = tuple(allowed_roles)
    if principal.has_any_role(*allowed_roles):
        return AuthorizationDecision.allow()
    return AuthorizationDecision.deny(
        f"Requires one of the roles {', '.join(allowed_roles)}"
    )


def is_admin(user: User) -> bool:
    return authority_name("ADMIN") in user.authorities


def course_role_of(user: User, course: Course) -> CourseRole:
    """Highest role tier the user holds in the course."""
    if user is None or course is None:
        return CourseRole.NONE
    if is_admin(user):
        return CourseRole.ADMIN

    groups = user.groups
    if course.instructor_group_name and course.instructor_group_name in groups:
        return CourseRole.INSTRUCTOR
    if course.teaching_assistant_group_name and course.teaching_assistant_group_name in groups:
        return CourseRole.TEACHING_ASSISTANT
    if course.student_group_name and course.student_group_name in groups:
        return CourseRole.STUDENT
    return CourseRole.NONE


def check_course_role(user: User, course: Course, minimum: CourseRole) -> AuthorizationDecision:
    """Fine-grained gate: the user's tier in the course must reach the minimum."""
    role = course_role_of(user, course)
    if role >= minimum:
        return AuthorizationDecision.allow()
    return AuthorizationDecision.deny(
        f"Requires at least {minimum.name.lower()} in course {course.id if course else None}"
    )


def is_at_least_teaching_assistant_in_course(course: Course, user: User) -> bool:
    return bool(check_course_role(user, course, CourseRole.TEACHING_ASSISTANT))


def is_at_least_teaching_assistant_for_exercise(exercise: Exercise, user: User) -> bool:
    return is_at_least_teaching_assistant_in_course(exercise.course, user)


def check_team_access(user: User, exercise: Exercise, team: Team) -> AuthorizationDecision:
    """Course staff may access every team of the exercise; students only their own team."""
    if is_at_least_teaching_assistant_for_exercise(exercise, user):
        return AuthorizationDecision.allow()
    if team.has_student(user):
        return AuthorizationDecision.allow()
    return AuthorizationDecision.deny(
        f"User {user.login} is neither staff of the course nor a member of team {team.id}"
    )
