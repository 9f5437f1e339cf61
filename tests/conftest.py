"""
Pytest configuration and fixtures.
Provides test database, client, and common test utilities.
"""

import os

# Settings are read at import time, so the environment must be set first.
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-the-acquisitions-api")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DISABLE_BOOTSTRAP_USERS", "true")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "1000")

from typing import Any, Callable, Generator, Union  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from acquisitions.core.config import settings  # noqa: E402
from acquisitions.core.security import create_access_token  # noqa: E402
from acquisitions.db.session import get_session, init_db  # noqa: E402
from acquisitions.main import app  # noqa: E402
from acquisitions.models.user import User, UserRole  # noqa: E402
from acquisitions.schemas.user import UserCreate  # noqa: E402
from acquisitions.services.auth_service import AuthService  # noqa: E402


@pytest.fixture(name="session")
def session_fixture() -> Generator[Session, None, None]:
    """
    Create a test database session.
    Uses an in-memory SQLite database for fast tests.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)

    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with dependency overrides.
    """

    def get_session_override() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(session: Session) -> User:
    """
    Create a regular user.
    """
    user_create = UserCreate(
        name="Test User",
        email="test@example.com",
        password="testpassword123",
    )
    return AuthService(session).create_user(user_create)


@pytest.fixture(name="other_user")
def other_user_fixture(session: Session) -> User:
    """
    Create a second regular user.
    """
    user_create = UserCreate(
        name="Other User",
        email="other@example.com",
        password="otherpassword123",
    )
    return AuthService(session).create_user(user_create)


@pytest.fixture(name="test_admin")
def test_admin_fixture(session: Session) -> User:
    """
    Create an admin user.
    """
    user_create = UserCreate(
        name="Admin User",
        email="admin@example.com",
        password="adminpassword123",
        role=UserRole.ADMIN,
    )
    return AuthService(session).create_user(user_create)


@pytest.fixture(name="login_as")
def login_as_fixture(client: TestClient) -> Callable[[Union[User, dict[str, Any]]], str]:
    """
    Put a session cookie for the given user (or raw claims) on the client.
    """

    def _login_as(who: Union[User, dict[str, Any]]) -> str:
        if isinstance(who, User):
            claims = {"id": who.id, "email": who.email, "role": who.role.value}
        else:
            claims = who
        token = create_access_token(claims)
        client.cookies.set(settings.SESSION_COOKIE_NAME, token)
        return token

    return _login_as
