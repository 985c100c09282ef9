"""
Tests for bearer authentication and the self-profile endpoints.
"""
from datetime import timedelta

from app.core.security import create_access_token
from app.db.models.user import User


def test_profile_requires_token(client):
    response = client.get("/api/auth/profile")

    assert response.status_code == 401
    assert "error" in response.json()


def test_profile_invalid_token(client):
    response = client.get("/api/auth/profile", headers={"Authorization": "Bearer invalid_token"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_profile_expired_token(client, seeker, settings):
    token = create_access_token(
        {"id": seeker.id, "role": seeker.role},
        settings.secret_key,
        expires_delta=timedelta(minutes=-1),
    )

    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_get_profile(client, seeker, auth_headers):
    response = client.get("/api/auth/profile", headers=auth_headers(seeker))

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == seeker.id
    assert data["email"] == "seeker@example.com"
    assert data["role"] == "job_seeker"
    assert data["skills"] == "python, sql"
    assert "password" not in data
    assert "password_hash" not in data


def test_get_profile_of_deleted_user(client, db, seeker, auth_headers):
    headers = auth_headers(seeker)
    db.delete(seeker)
    db.commit()

    response = client.get("/api/auth/profile", headers=headers)

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_update_profile_is_partial(client, db, seeker, auth_headers):
    """Test fields absent from the request keep their values."""
    seeker_id = seeker.id

    response = client.put(
        "/api/auth/profile",
        json={"resume": "https://example.com/cv.pdf"},
        headers=auth_headers(seeker),
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Profile updated successfully"}

    db.expire_all()
    user = db.query(User).filter(User.id == seeker_id).first()
    assert user.resume == "https://example.com/cv.pdf"
    assert user.skills == "python, sql"
    assert user.name == "Sam Seeker"


def test_update_profile_explicit_null_clears_optional_field(client, db, seeker, auth_headers):
    seeker_id = seeker.id

    response = client.put("/api/auth/profile", json={"skills": None}, headers=auth_headers(seeker))

    assert response.status_code == 200
    db.expire_all()
    assert db.query(User).filter(User.id == seeker_id).first().skills is None


def test_update_profile_rejects_null_name(client, seeker, auth_headers):
    response = client.put("/api/auth/profile", json={"name": None}, headers=auth_headers(seeker))

    assert response.status_code == 400


def test_update_profile_ignores_role(client, db, seeker, auth_headers):
    """Role is not a self-editable field."""
    seeker_id = seeker.id

    response = client.put("/api/auth/profile", json={"role": "admin"}, headers=auth_headers(seeker))

    assert response.status_code == 200
    db.expire_all()
    assert db.query(User).filter(User.id == seeker_id).first().role == "job_seeker"
