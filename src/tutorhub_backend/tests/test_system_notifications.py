"""Tests for the system notification endpoints."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tutorhub_backend.model.notification import SystemNotification
from tutorhub_backend.tests.conftest import create_user


def _iso(value: datetime) -> str:
    return value.isoformat()


@pytest.fixture
def admin(db: Session):
    return create_user(db, "admin", roles=["USER", "ADMIN"])


@pytest.fixture
def notifications(db: Session):
    now = datetime.now(timezone.utc)
    items = [
        SystemNotification(title="maintenance", type="WARNING", notification_date=now - timedelta(hours=1)),
        SystemNotification(title="welcome", type="INFO", notification_date=now - timedelta(days=1),
                           expire_date=now + timedelta(days=1)),
        SystemNotification(title="old", type="INFO", notification_date=now - timedelta(days=3),
                           expire_date=now - timedelta(days=2)),
        SystemNotification(title="upcoming", type="INFO", notification_date=now + timedelta(days=1)),
    ]
    db.add_all(items)
    db.commit()
    return items


@pytest.mark.unit
class TestActiveSystemNotifications:

    def test_active_is_public_and_ordered(self, test_client: TestClient, notifications):
        response = test_client.get("/system-notifications/active")

        assert response.status_code == 200
        assert [n["title"] for n in response.json()] == ["welcome", "maintenance"]
        assert response.json()[1]["type"] == "WARNING"


@pytest.mark.unit
class TestSystemNotificationAdministration:

    def test_admin_lists_all(self, test_client: TestClient, login_as, admin, notifications):
        login_as(admin)

        response = test_client.get("/system-notifications")

        assert response.status_code == 200
        assert [n["title"] for n in response.json()] == ["upcoming", "maintenance", "welcome", "old"]

    def test_non_admin_is_forbidden(self, db: Session, test_client: TestClient, login_as, notifications):
        login_as(create_user(db, "tutor", roles=["USER", "TA"]))

        response = test_client.get("/system-notifications")

        assert response.status_code == 403
        assert response.json()["error_code"] == "AUTHZ_002"

    def test_unauthenticated_is_rejected(self, test_client: TestClient):
        response = test_client.get("/system-notifications")

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_001"

    def test_create_update_delete(self, db: Session, test_client: TestClient, login_as, admin):
        login_as(admin)
        start = datetime(2026, 6, 1, 8, 0, tzinfo=timezone.utc)

        created = test_client.post(
            "/system-notifications",
            json={"title": "Exam week", "type": "WARNING", "notification_date": _iso(start)},
        )
        assert created.status_code == 201
        notification_id = created.json()["id"]
        assert created.headers["Location"] == f"/system-notifications/{notification_id}"
        assert created.headers["X-tutorhubApp-alert"] == "tutorhubApp.systemNotification.created"

        updated = test_client.put(
            "/system-notifications",
            json={
                "id": notification_id,
                "title": "Exam weeks",
                "type": "WARNING",
                "notification_date": _iso(start),
                "expire_date": _iso(start + timedelta(days=14)),
            },
        )
        assert updated.status_code == 200
        assert updated.json()["title"] == "Exam weeks"
        assert updated.json()["expire_date"] is not None

        fetched = test_client.get(f"/system-notifications/{notification_id}")
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "Exam weeks"

        deleted = test_client.delete(f"/system-notifications/{notification_id}")
        assert deleted.status_code == 200
        assert deleted.headers["X-tutorhubApp-alert"] == "tutorhubApp.systemNotification.deleted"
        assert db.query(SystemNotification).count() == 0

    def test_create_with_id_fails(self, test_client: TestClient, login_as, admin):
        login_as(admin)

        response = test_client.post(
            "/system-notifications",
            json={"id": 5, "title": "x", "notification_date": _iso(datetime.now(timezone.utc))},
        )

        assert response.status_code == 400
        assert response.headers["X-tutorhubApp-error"] == "error.idexists"

    def test_update_without_id_fails(self, test_client: TestClient, login_as, admin):
        login_as(admin)

        response = test_client.put(
            "/system-notifications",
            json={"title": "x", "notification_date": _iso(datetime.now(timezone.utc))},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_002"

    def test_expire_before_notification_fails(self, db: Session, test_client: TestClient, login_as, admin):
        login_as(admin)
        start = datetime(2026, 6, 1, 8, 0, tzinfo=timezone.utc)

        response = test_client.post(
            "/system-notifications",
            json={
                "title": "Backwards",
                "notification_date": _iso(start),
                "expire_date": _iso(start - timedelta(days=1)),
            },
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"
        assert db.query(SystemNotification).count() == 0

    def test_unknown_notification_returns_404(self, test_client: TestClient, login_as, admin):
        login_as(admin)

        assert test_client.get("/system-notifications/9999").status_code == 404
        assert test_client.delete("/system-notifications/9999").status_code == 404
