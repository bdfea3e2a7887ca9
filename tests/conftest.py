"""Pytest configuration and shared fixtures for family directory tests."""

import sys
from typing import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from loguru import logger
from sqlalchemy.orm import Session

from family_directory import models  # noqa: F401
from family_directory.auth import hash_password
from family_directory.config import Settings
from family_directory.core.store import FamilyStore
from family_directory.database import Base, build_engine, build_session_factory
from family_directory.main import create_app
from family_directory.models.user import User, ROLE_ADMIN, ROLE_MEMBER


TEST_ROUNDS = 4
DEFAULT_PASSWORD = "correct horse battery"


# =============================================================================
# Test Configuration
# =============================================================================


@pytest.fixture(scope="function", autouse=True)
def reset_loguru():
    """Keep loguru quiet and safe between tests."""
    logger.remove()
    logger.add(sys.stderr, level="ERROR", format="{time} {level} {message}", catch=True)
    yield
    logger.remove()


@pytest.fixture
def test_settings() -> Settings:
    """Isolated in-memory settings; bootstrap admin disabled."""
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key",
        BCRYPT_ROUNDS=TEST_ROUNDS,
        LOG_LEVEL="ERROR",
        LOG_JSON=False,
        SESSION_COOKIE_NAME="session",
        SESSION_COOKIE_SECURE=False,
        CORS_ORIGINS=["*"],
        ADMIN_USERNAME=None,
        ADMIN_PASSWORD=None,
        ADMIN_INVITE_EMAIL=None,
    )


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Bare session over a fresh in-memory database."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    session = build_session_factory(engine)()

    yield session

    session.close()
    engine.dispose()


@pytest.fixture
def store(db: Session) -> FamilyStore:
    return FamilyStore(db)


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    """Factory for committed users (with profiles)."""

    def _make(
        username: str = "member@example.com",
        password: str = DEFAULT_PASSWORD,
        role: str = ROLE_MEMBER,
    ) -> User:
        store = FamilyStore(db)
        user = store.add_user(username, hash_password(password, rounds=TEST_ROUNDS), role=role)
        store.add_profile(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def admin(make_user) -> User:
    return make_user("admin@example.com", role=ROLE_ADMIN)


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app(test_settings: Settings) -> Generator[FastAPI, None, None]:
    application = create_app(test_settings)
    yield application
    application.state.engine.dispose()


@pytest.fixture
def app_db(app: FastAPI) -> Generator[Session, None, None]:
    """Session bound to the application's own database."""
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Anonymous client."""
    return TestClient(app)


@pytest.fixture
def create_account(app_db: Session) -> Callable[..., User]:
    """Factory for users inside the application's database."""

    def _create(username: str, role: str = ROLE_MEMBER, password: str = DEFAULT_PASSWORD) -> User:
        store = FamilyStore(app_db)
        user = store.add_user(username, hash_password(password, rounds=TEST_ROUNDS), role=role)
        store.add_profile(user)
        app_db.commit()
        app_db.refresh(user)
        return user

    return _create


@pytest.fixture
def login_client(app: FastAPI) -> Callable[..., TestClient]:
    """Returns a new client holding a session cookie for the given user."""

    def _login(username: str, password: str = DEFAULT_PASSWORD) -> TestClient:
        c = TestClient(app)
        rv = c.post("/auth/login", json={"username": username, "password": password})
        assert rv.status_code == 200, rv.text
        return c

    return _login


@pytest.fixture
def admin_client(create_account, login_client) -> TestClient:
    create_account("admin@example.com", role=ROLE_ADMIN)
    return login_client("admin@example.com")


@pytest.fixture
def member_client(create_account, login_client) -> TestClient:
    create_account("member@example.com")
    return login_client("member@example.com")
