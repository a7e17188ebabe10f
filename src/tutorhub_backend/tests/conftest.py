"""Pytest configuration and shared fixtures for the backend tests.

Tests run against an in-memory SQLite database. The FastAPI app gets the
test session injected through dependency overrides; `login_as` swaps the
authenticated principal without going through Basic authentication.
"""

import os

# Must be set before tutorhub_backend.database builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

from types import SimpleNamespace
from typing import Iterable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tutorhub_backend.database import get_db
from tutorhub_backend.model import Base
from tutorhub_backend.model.auth import User, UserGroup, UserRole
from tutorhub_backend.model.course import Course, Exercise, Team
from tutorhub_backend.permissions.auth import PrincipalBuilder, get_current_principal
from tutorhub_backend.permissions.principal import authority_name
from tutorhub_backend.server import app


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine) -> Session:
    session = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def test_client(db: Session):
    """Client whose requests share the test session."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def login_as(test_client: TestClient):
    """Authenticate all following requests as the given user."""

    def _login_as(user: User) -> None:
        principal = PrincipalBuilder.build(user)
        app.dependency_overrides[get_current_principal] = lambda: principal

    return _login_as


# ============================================================================
# Domain factories
# ============================================================================


def create_user(
    db: Session,
    login: str,
    groups: Iterable[str] = (),
    roles: Iterable[str] = ("USER",),
    password: str = None,
    first_name: str = None,
    last_name: str = None,
) -> User:
    user = User(
        login=login,
        first_name=first_name or login.capitalize(),
        last_name=last_name or "Tester",
        email=f"{login}@test.com",
        password=password,
    )
    user.user_groups = [UserGroup(group_name=group) for group in groups]
    user.user_roles = [UserRole(role_id=authority_name(role)) for role in roles]
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_team(db: Session, exercise: Exercise, short_name: str, students=(), owner: User = None) -> Team:
    team = Team(
        name=f"Team {short_name}",
        short_name=short_name,
        exercise_id=exercise.id,
        owner=owner,
        students=list(students),
    )
    db.add(team)
    db.commit()
    db.refresh(team)
    return team


@pytest.fixture
def course_setup(db: Session) -> SimpleNamespace:
    """
    A course with a team exercise and users in every role.

    student1..student4 are students of the course, tutor is a teaching
    assistant, instructor an instructor. foreign_tutor holds ROLE_TA but is
    not part of the course.
    """
    course = Course(
        title="Software Engineering",
        short_name="se2026",
        student_group_name="se-students",
        teaching_assistant_group_name="se-tutors",
        instructor_group_name="se-instructors",
    )
    db.add(course)
    db.commit()

    exercise = Exercise(title="Team Project", mode="team", course_id=course.id)
    other_exercise = Exercise(title="Second Team Project", mode="team", course_id=course.id)
    db.add_all([exercise, other_exercise])
    db.commit()

    students = [
        create_user(db, f"student{i}", groups=["se-students"], first_name=f"Stud{i}", last_name="Ent")
        for i in range(1, 5)
    ]

    return SimpleNamespace(
        course=course,
        exercise=exercise,
        other_exercise=other_exercise,
        students=students,
        tutor=create_user(db, "tutor", groups=["se-tutors"], roles=["USER", "TA"]),
        instructor=create_user(db, "instructor", groups=["se-instructors"], roles=["USER", "INSTRUCTOR"]),
        admin=create_user(db, "admin", roles=["USER", "ADMIN"]),
        foreign_tutor=create_user(db, "foreigntutor", groups=["other-tutors"], roles=["USER", "TA"]),
    )
