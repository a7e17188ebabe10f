"""Tests for the grading criteria endpoint."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tutorhub_backend.model.grading import GradingCriterion, StructuredGradingInstruction


@pytest.fixture
def criteria(db: Session, course_setup):
    criterion = GradingCriterion(title="Correctness", exercise_id=course_setup.exercise.id)
    criterion.structured_grading_instructions = [
        StructuredGradingInstruction(credits=2.0, grading_scale="full", feedback="All tests pass", usage_count=3),
        StructuredGradingInstruction(credits=1.0, grading_scale="partial", feedback="Some tests fail"),
    ]
    db.add(criterion)
    db.commit()
    return criterion


@pytest.mark.unit
class TestGradingCriteria:

    def test_tutor_gets_criteria_with_instructions(self, test_client: TestClient, login_as, course_setup, criteria):
        login_as(course_setup.tutor)

        response = test_client.get(f"/exercises/{course_setup.exercise.id}/grading-criteria")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["title"] == "Correctness"
        assert data[0]["exercise_id"] == course_setup.exercise.id
        instructions = data[0]["structured_grading_instructions"]
        assert [i["grading_scale"] for i in instructions] == ["full", "partial"]
        assert instructions[0]["credits"] == 2.0
        assert instructions[0]["usage_count"] == 3

    def test_other_exercise_has_no_criteria(self, test_client: TestClient, login_as, course_setup, criteria):
        login_as(course_setup.instructor)

        response = test_client.get(f"/exercises/{course_setup.other_exercise.id}/grading-criteria")

        assert response.status_code == 200
        assert response.json() == []

    def test_student_is_forbidden(self, test_client: TestClient, login_as, course_setup, criteria):
        login_as(course_setup.students[0])

        response = test_client.get(f"/exercises/{course_setup.exercise.id}/grading-criteria")

        assert response.status_code == 403

    def test_unknown_exercise_returns_404(self, test_client: TestClient, login_as, course_setup):
        login_as(course_setup.tutor)

        response = test_client.get("/exercises/9999/grading-criteria")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NF_004"
