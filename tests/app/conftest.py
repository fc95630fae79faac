import pytest
from datetime import datetime, timezone
from typing import Iterator
from fastapi.testclient import TestClient

from gymlog.app.app import app
from gymlog.models.user import User, Role
from tests._factories import FakeWorkoutStore, TEST_USER_ID
from uuid import UUID

TEST_IDP_USER_ID = UUID("00000000-0000-0000-0000-000000000002")


def _create_test_user(role: Role = "viewer") -> User:
    """Create a test user with specified role."""
    return User(
        id=TEST_USER_ID,
        idp_user_id=TEST_IDP_USER_ID,
        email="test@example.com",
        username="test_user",
        role=role,
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )


def _authenticated_client(token: str, role: Role) -> Iterator[TestClient]:
    """Yield a client whose bearer token resolves to a test user with `role`.

    JWT validation and user lookup are replaced where oauth.py calls them.
    """

    def mock_validate(candidate: str):
        if candidate == token:
            return {
                "username": f"{role}_user",
                "email": f"{role}@example.com",
                "sub": str(TEST_IDP_USER_ID),
            }
        return None

    def mock_get_or_create_user(idp_user_id, email, username):
        return _create_test_user(role=role)

    from gymlog.app import oauth

    original_validate = oauth.validate_jwt_token
    original_get_or_create = oauth.get_or_create_user
    oauth.validate_jwt_token = mock_validate
    oauth.get_or_create_user = mock_get_or_create_user

    try:
        client = TestClient(app)
        client.headers = {"Authorization": f"Bearer {token}"}
        yield client
    finally:
        oauth.validate_jwt_token = original_validate
        oauth.get_or_create_user = original_get_or_create


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Unauthenticated test client."""
    return TestClient(app)


@pytest.fixture(scope="function")
def viewer_client() -> Iterator[TestClient]:
    """Test client with mocked OAuth authentication (viewer role)."""
    yield from _authenticated_client("viewer_token", "viewer")


@pytest.fixture(scope="function")
def editor_client() -> Iterator[TestClient]:
    """Test client with mocked OAuth authentication (editor role)."""
    yield from _authenticated_client("editor_token", "editor")


@pytest.fixture
def store_override(fake_store: FakeWorkoutStore) -> Iterator[FakeWorkoutStore]:
    """Route the importer's storage to the in-memory fake."""
    from gymlog.app.dependencies import workout_store

    app.dependency_overrides[workout_store] = lambda: fake_store
    yield fake_store
    app.dependency_overrides.pop(workout_store, None)
