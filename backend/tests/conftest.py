"""Shared test fixtures."""

import uuid

import bcrypt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from devconnector.auth.models import User
from devconnector.auth.tokens import sign_token
from devconnector.config import Settings
from devconnector.database.base import Base
from devconnector.main import create_app
from devconnector.profiles.models import Profile

# Models must be imported so Base.metadata.create_all() sees all tables.
_ALL_MODELS = [User, Profile]

_TEST_PASSWORD = "correct-horse-battery"


def _hash(password: str) -> str:
    # Low cost factor keeps the suite fast; production hashes are created elsewhere
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=4)).decode()


@pytest.fixture
def test_password():
    """Plain-text password of every seeded user."""
    return _TEST_PASSWORD


@pytest.fixture
def make_hash():
    """bcrypt hasher for users created inside a test."""
    return _hash


@pytest.fixture
def db_session():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestSession = sessionmaker(bind=engine)
    session = TestSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def test_user(db_session):
    """Create a test user."""
    user = User(
        id=uuid.uuid4(),
        name="Test User",
        email="test@example.com",
        password_hash=_hash(_TEST_PASSWORD),
        avatar="//www.gravatar.com/avatar/test",
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        jwt_secret="test-secret",
        cors_origins="*",
    )


@pytest.fixture
def client(test_settings):
    """TestClient running the real lifespan against an in-memory database."""
    app = create_app(test_settings)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def app_session(client):
    """Session on the database the running app uses."""
    session = client.app.state.database.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app_user(app_session):
    user = User(
        id=uuid.uuid4(),
        name="Ada Lovelace",
        email="ada@example.com",
        password_hash=_hash(_TEST_PASSWORD),
        avatar="//www.gravatar.com/avatar/ada",
    )
    app_session.add(user)
    app_session.commit()
    return user


@pytest.fixture
def auth_headers(app_user, test_settings):
    token = sign_token(str(app_user.id), test_settings.jwt_secret)
    return {"x-auth-token": token}
