"""
Tests for the login endpoint and the tokens it issues.
"""
import time

import pytest

from app.core.security import decode_access_token
from app.db.models.user import UserRole


@pytest.fixture
def test_user(make_user):
    return make_user("test_login@example.com", UserRole.EMPLOYER, name="Test Login User")


def test_login_success(client, test_user, password):
    response = client.post(
        "/api/auth/login",
        json={"email": "test_login@example.com", "password": password},
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data["token"]) > 0
    assert data["token_type"] == "bearer"
    assert data["user"] == {
        "id": test_user.id,
        "name": "Test Login User",
        "email": "test_login@example.com",
        "role": "employer",
    }


def test_login_token_carries_id_and_role(client, test_user, password, settings):
    """Test the issued token decodes to the authenticated user's id and role."""
    response = client.post(
        "/api/auth/login",
        json={"email": "test_login@example.com", "password": password},
    )

    payload = decode_access_token(response.json()["token"], settings.secret_key)
    assert payload["id"] == test_user.id
    assert payload["role"] == "employer"
    assert "exp" in payload


def test_login_token_expires_after_one_hour(client, test_user, password, settings):
    issued_at = time.time()
    response = client.post(
        "/api/auth/login",
        json={"email": "test_login@example.com", "password": password},
    )

    payload = decode_access_token(response.json()["token"], settings.secret_key)
    assert abs(payload["exp"] - (issued_at + 3600)) < 10


def test_login_wrong_password_and_unknown_email_look_the_same(client, test_user):
    wrong_password = client.post(
        "/api/auth/login",
        json={"email": "test_login@example.com", "password": "wrong_password_123"},
    )
    unknown_email = client.post(
        "/api/auth/login",
        json={"email": "nonexistent@example.com", "password": "somepassword123"},
    )

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


def test_login_missing_fields(client):
    response = client.post("/api/auth/login", json={"email": "test@example.com"})

    assert response.status_code == 400
    assert "error" in response.json()
