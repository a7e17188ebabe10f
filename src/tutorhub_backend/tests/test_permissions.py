"""Tests for the authorization policy; no database needed."""

import pytest

from tutorhub_backend.exceptions import ForbiddenException, InsufficientCourseRoleException
from tutorhub_backend.model.auth import User, UserGroup, UserRole
from tutorhub_backend.model.course import Course, Exercise, Team
from tutorhub_backend.permissions.core import (
    ADMIN_ROLES,
    ALL_ROLES,
    STAFF_ROLES,
    AuthorizationDecision,
    CourseRole,
    check_course_role,
    check_role_gate,
    check_team_access,
    course_role_of,
    is_at_least_teaching_assistant_for_exercise,
    is_at_least_teaching_assistant_in_course,
)
from tutorhub_backend.permissions.guards import enforce
from tutorhub_backend.permissions.principal import Principal, authority_name


def make_user(user_id, groups=(), roles=("USER",)):
    user = User(id=user_id, login=f"user{user_id}")
    user.user_groups = [UserGroup(group_name=group) for group in groups]
    user.user_roles = [UserRole(role_id=authority_name(role)) for role in roles]
    return user


@pytest.fixture
def course():
    return Course(
        id=1,
        title="Algorithms",
        student_group_name="algo-students",
        teaching_assistant_group_name="algo-tutors",
        instructor_group_name="algo-instructors",
    )


@pytest.fixture
def exercise(course):
    return Exercise(id=10, title="Sorting", mode="team", course=course)


@pytest.mark.unit
class TestPrincipal:

    def test_authority_name_normalization(self):
        assert authority_name("ta") == "ROLE_TA"
        assert authority_name("ROLE_ADMIN") == "ROLE_ADMIN"

    def test_has_any_role_accepts_both_spellings(self):
        principal = Principal(user_id=1, login="tutor", roles=["ROLE_USER", "ROLE_TA"])

        assert principal.has_any_role("TA")
        assert principal.has_any_role("ROLE_TA", "ADMIN")
        assert not principal.has_any_role("INSTRUCTOR", "ADMIN")
        assert not principal.is_admin


@pytest.mark.unit
class TestRoleGate:

    def test_staff_gate(self):
        student = Principal(user_id=1, login="s", roles=["ROLE_USER"])
        tutor = Principal(user_id=2, login="t", roles=["ROLE_USER", "ROLE_TA"])

        assert not check_role_gate(student, STAFF_ROLES)
        assert check_role_gate(tutor, STAFF_ROLES)
        assert check_role_gate(student, ALL_ROLES)

    def test_denial_names_the_roles(self):
        decision = check_role_gate(Principal(user_id=1, login="s", roles=[]), ADMIN_ROLES)

        assert decision.allowed is False
        assert "ADMIN" in decision.reason


@pytest.mark.unit
class TestCourseRoles:

    def test_role_tiers(self, course):
        assert course_role_of(make_user(1, groups=["algo-students"]), course) == CourseRole.STUDENT
        assert course_role_of(make_user(2, groups=["algo-tutors"]), course) == CourseRole.TEACHING_ASSISTANT
        assert course_role_of(make_user(3, groups=["algo-instructors"]), course) == CourseRole.INSTRUCTOR
        assert course_role_of(make_user(4, roles=["USER", "ADMIN"]), course) == CourseRole.ADMIN
        assert course_role_of(make_user(5, groups=["other"]), course) == CourseRole.NONE

    def test_highest_tier_wins(self, course):
        user = make_user(1, groups=["algo-students", "algo-instructors"])

        assert course_role_of(user, course) == CourseRole.INSTRUCTOR

    def test_teaching_assistant_predicates(self, course, exercise):
        tutor = make_user(1, groups=["algo-tutors"])
        student = make_user(2, groups=["algo-students"])

        assert is_at_least_teaching_assistant_in_course(course, tutor)
        assert is_at_least_teaching_assistant_for_exercise(exercise, tutor)
        assert not is_at_least_teaching_assistant_in_course(course, student)
        assert not check_course_role(tutor, course, CourseRole.INSTRUCTOR)

    def test_global_ta_authority_does_not_grant_course_role(self, course):
        user = make_user(1, groups=["other-tutors"], roles=["USER", "TA"])

        decision = check_course_role(user, course, CourseRole.TEACHING_ASSISTANT)

        assert not decision
        assert "teaching_assistant" in decision.reason


@pytest.mark.unit
class TestTeamAccess:

    def test_member_and_staff_have_access(self, exercise):
        member = make_user(1, groups=["algo-students"])
        outsider = make_user(2, groups=["algo-students"])
        tutor = make_user(3, groups=["algo-tutors"])
        team = Team(id=100, short_name="alpha", exercise=exercise, students=[member])

        assert check_team_access(member, exercise, team)
        assert check_team_access(tutor, exercise, team)
        assert not check_team_access(outsider, exercise, team)


@pytest.mark.unit
class TestDecisions:

    def test_enforce_raises_forbidden(self):
        principal = Principal(user_id=7, login="s")

        with pytest.raises(ForbiddenException) as exc_info:
            enforce(AuthorizationDecision.deny("nope"), principal)

        assert exc_info.value.status_code == 403
        assert exc_info.value.context["reason"] == "nope"
        assert exc_info.value.user_id == "7"

    def test_enforce_uses_given_exception(self):
        with pytest.raises(InsufficientCourseRoleException):
            enforce(AuthorizationDecision.deny("nope"), exception_class=InsufficientCourseRoleException)

    def test_enforce_allows(self):
        enforce(AuthorizationDecision.allow())
