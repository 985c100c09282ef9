"""
Shared fixtures: an app on a fresh in-memory SQLite database per test,
plus helpers for creating users and minting their tokens.
"""
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.security import hash_password, create_access_token
from app.db.models.user import User, UserRole
from app.db.models.job import Job
from app.main import create_app

TEST_SECRET = "test-secret-key"
TEST_PASSWORD = "testpass123"


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        secret_key=TEST_SECRET,
        static_dir="does-not-exist",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client; entering the context runs the lifespan, which creates the tables."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app, client):
    """Database session bound to the same in-memory database as the client."""
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def password():
    """Plaintext password make_user gives every user unless told otherwise."""
    return TEST_PASSWORD


@pytest.fixture
def make_user(db):
    """Factory creating a user directly in the database."""
    def _make_user(email, role=UserRole.JOB_SEEKER, name="Test User", password=TEST_PASSWORD, **fields):
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=UserRole(role).value,
            **fields
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def token_for():
    def _token_for(user):
        return create_access_token({"id": user.id, "role": user.role}, TEST_SECRET)

    return _token_for


@pytest.fixture
def auth_headers(token_for):
    def _auth_headers(user):
        return {"Authorization": f"Bearer {token_for(user)}"}

    return _auth_headers


@pytest.fixture
def seeker(make_user):
    return make_user("seeker@example.com", UserRole.JOB_SEEKER, name="Sam Seeker", skills="python, sql")


@pytest.fixture
def employer(make_user):
    return make_user(
        "employer@example.com",
        UserRole.EMPLOYER,
        name="Erin Employer",
        company_name="Acme Corp",
    )


@pytest.fixture
def other_employer(make_user):
    return make_user("other.employer@example.com", UserRole.EMPLOYER, name="Olly Other")


@pytest.fixture
def admin(make_user):
    return make_user("admin@example.com", UserRole.ADMIN, name="Ada Admin")


@pytest.fixture
def make_job(db):
    """Factory creating a job directly in the database."""
    def _make_job(employer, title="Backend Engineer", **fields):
        job = Job(employer_id=employer.id, title=title, **fields)
        db.add(job)
        db.commit()
        db.refresh(job)
        return job

    return _make_job
