"""
Shared fixtures.

Every test gets a fresh application wired to its own in-memory SQLite
database; migrations run when the TestClient enters the app lifespan.
"""
import os

# Must be in place before config/main are imported
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from models.users import User
from utils.hashing import PasswordHasher
from utils.tokenJWT import TokenService

TEST_EMAIL = "a@x.com"
TEST_PASSWORD = "pw1"


@pytest.fixture
def settings():
    return Settings(
        SECRET_KEY="test-secret-key",
        DATABASE_URL="sqlite://",
        BCRYPT_ROUNDS=4,  # bcrypt minimum, keeps the suite fast
        LOG_LEVEL="WARNING",
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session(client, app):
    # Depends on client so the schema exists before the session is used
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def token_service(settings):
    return TokenService(settings.SECRET_KEY, settings.ALGORITHM, settings.ACCESS_TOKEN_EXPIRE_MINUTES)


@pytest.fixture
def registered_user(client):
    response = client.post("/register", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})
    assert response.status_code == 200
    return {"email": TEST_EMAIL, "password": TEST_PASSWORD}


@pytest.fixture
def auth_headers(client, registered_user):
    response = client.post("/login", json=registered_user)
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def make_user(db_session, settings):
    """Insert a user row directly, bypassing the HTTP layer."""
    hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)

    def _make(email, first_name=None, last_name=None, **profile):
        user = User(
            email=email,
            password_hash=hasher.hash("secret"),
            first_name=first_name,
            last_name=last_name,
            **profile,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_delegation(client):
    """Create a delegation through the API and return the stored row."""

    def _make(task_name="Task", assigned_to="worker@x.com", status="Pending", **extra):
        payload = {
            "taskName": task_name,
            "assignedBy": "boss@x.com",
            "assignedTo": assigned_to,
            "status": status,
            **extra,
        }
        response = client.post("/delegations", json=payload)
        assert response.status_code == 200, response.text
        return response.json()

    return _make
