"""Tests for HTTP Basic authentication and password hashing."""

import base64

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tutorhub_backend.model.auth import User
from tutorhub_backend.server import init_admin_user
from tutorhub_backend.settings import settings
from tutorhub_backend.tests.conftest import create_user
from tutorhub_types.password_utils import hash_password, needs_rehash, verify_password


def basic(login: str, password: str) -> dict:
    token = base64.b64encode(f"{login}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def tutor(db: Session):
    return create_user(db, "tutor", roles=["USER", "TA"], password=hash_password("Secret123!"))


@pytest.mark.unit
class TestPasswordHashing:

    def test_hash_and_verify(self):
        hashed = hash_password("Secret123!")

        assert hashed.startswith("$argon2id$")
        assert verify_password("Secret123!", hashed)
        assert not verify_password("secret123!", hashed)
        assert not needs_rehash(hashed)

    def test_hashes_are_salted(self):
        assert hash_password("Secret123!") != hash_password("Secret123!")

    def test_invalid_input(self):
        with pytest.raises(ValueError):
            hash_password("")
        assert not verify_password("Secret123!", "not-a-hash")
        assert not verify_password("Secret123!", None)
        assert needs_rehash("not-a-hash")


@pytest.mark.unit
class TestBasicAuthentication:

    def test_valid_credentials(self, test_client: TestClient, tutor):
        response = test_client.get("/teams", params={"shortName": "alpha"}, headers=basic("tutor", "Secret123!"))

        assert response.status_code == 200
        assert response.json() is False

    def test_login_is_case_insensitive(self, test_client: TestClient, tutor):
        response = test_client.get("/teams", params={"shortName": "alpha"}, headers=basic("TUTOR", "Secret123!"))

        assert response.status_code == 200

    def test_wrong_password(self, test_client: TestClient, tutor):
        response = test_client.get("/teams", params={"shortName": "alpha"}, headers=basic("tutor", "wrong"))

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_001"
        assert response.headers["WWW-Authenticate"] == "Basic"

    def test_unknown_user(self, test_client: TestClient, tutor):
        response = test_client.get("/teams", params={"shortName": "alpha"}, headers=basic("nobody", "Secret123!"))

        assert response.status_code == 401

    def test_missing_header(self, test_client: TestClient, tutor):
        response = test_client.get("/teams", params={"shortName": "alpha"})

        assert response.status_code == 401

    @pytest.mark.parametrize("header", ["Bearer abc", "Basic", "Basic %%%", "Basic " + base64.b64encode(b"nocolon").decode()])
    def test_malformed_header(self, test_client: TestClient, tutor, header):
        response = test_client.get("/teams", params={"shortName": "alpha"}, headers={"Authorization": header})

        assert response.status_code == 401

    def test_user_without_password_cannot_log_in(self, db: Session, test_client: TestClient):
        create_user(db, "sso-user", roles=["USER", "TA"])

        response = test_client.get("/teams", params={"shortName": "alpha"}, headers=basic("sso-user", ""))

        assert response.status_code == 401


@pytest.mark.unit
class TestInitialAdmin:

    def test_admin_created_once(self, db: Session, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_LOGIN", "root")
        monkeypatch.setattr(settings, "ADMIN_PASSWORD", "RootPass1!")

        init_admin_user(db)
        init_admin_user(db)

        admins = db.query(User).filter(User.login == "root").all()
        assert len(admins) == 1
        assert "ROLE_ADMIN" in admins[0].authorities
        assert verify_password("RootPass1!", admins[0].password)

    def test_skipped_without_credentials(self, db: Session, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_LOGIN", None)

        init_admin_user(db)

        assert db.query(User).count() == 0
