"""
Shared fixtures for the HTTP tests.

Each test gets fresh tables in an in-memory SQLite database, and the app's
get_db dependency is pointed at it for the duration of the test.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobhunt.main import app
from jobhunt.db.base import Base
from jobhunt.db.models.user import User
from jobhunt.core.security import hash_password, create_access_token
from jobhunt.core.auth_dependency import get_db


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
api_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
ApiSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=api_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = ApiSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    """Test client backed by a fresh schema."""
    Base.metadata.create_all(bind=api_engine)
    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)
        Base.metadata.drop_all(bind=api_engine)


@pytest.fixture
def db_session(client):
    """Provide a database session on the same database the client uses."""
    db = ApiSessionLocal()
    try:
        yield db
    finally:
        db.close()


def _create_user(db, email):
    user = User(
        full_name="Test User",
        email=email,
        password_hash=hash_password("testpass123")
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def test_user(db_session):
    return _create_user(db_session, "test@example.com")


@pytest.fixture
def other_user(db_session):
    return _create_user(db_session, "other@example.com")


@pytest.fixture
def auth_headers(test_user):
    """Bearer headers for test_user."""
    return {"Authorization": f"Bearer {create_access_token({'sub': test_user.email})}"}


@pytest.fixture
def other_headers(other_user):
    return {"Authorization": f"Bearer {create_access_token({'sub': other_user.email})}"}
