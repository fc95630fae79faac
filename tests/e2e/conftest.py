import os
from pathlib import Path
from uuid import UUID
from typing import Iterator
import pytest
import psycopg
from testcontainers.postgres import PostgresContainer
from alembic.config import Config
from alembic import command
from fastapi.testclient import TestClient

VIEWER_IDP_USER_ID = UUID("00000000-0000-0000-0000-0000000000a1")
EDITOR_IDP_USER_ID = UUID("00000000-0000-0000-0000-0000000000a2")


@pytest.fixture(scope="session")
def db_url() -> Iterator[str]:
    """Start a Postgres container, run migrations, seed users, and return the DB URL."""
    with PostgresContainer("postgres:16") as pg:
        raw_url = pg.get_connection_url()
        # Normalize to a psycopg3-compatible URL
        url = raw_url.replace("postgresql+psycopg2://", "postgresql://")
        os.environ["DATABASE_URL"] = url

        repo_dir = Path(__file__).resolve().parents[2]
        alembic_cfg = Config(str(repo_dir / "alembic.ini"))
        command.upgrade(alembic_cfg, "head")

        with psycopg.connect(url) as conn:
            conn.execute(
                "INSERT INTO users (idp_user_id, username, role) VALUES (%s, %s, %s), (%s, %s, %s)",
                (
                    VIEWER_IDP_USER_ID,
                    "e2e_viewer",
                    "viewer",
                    EDITOR_IDP_USER_ID,
                    "e2e_editor",
                    "editor",
                ),
            )

        yield url


@pytest.fixture(scope="session")
def _mock_jwt(db_url: str) -> Iterator[None]:
    """Accept two fixed tokens; users are then resolved against the real users table."""
    from gymlog.app import oauth

    subjects = {
        "viewer_token": VIEWER_IDP_USER_ID,
        "editor_token": EDITOR_IDP_USER_ID,
    }

    def mock_validate(token: str) -> dict[str, str] | None:
        if token not in subjects:
            return None
        return {"sub": str(subjects[token]), "username": token.removesuffix("_token")}

    original_validate = oauth.validate_jwt_token
    oauth.validate_jwt_token = mock_validate  # type: ignore[assignment]
    yield
    oauth.validate_jwt_token = original_validate


@pytest.fixture(scope="session")
def viewer_client(db_url: str, _mock_jwt: None) -> TestClient:
    from gymlog.app.app import app

    client = TestClient(app)
    client.headers = {"Authorization": "Bearer viewer_token"}
    return client


@pytest.fixture(scope="session")
def editor_client(db_url: str, _mock_jwt: None) -> TestClient:
    from gymlog.app.app import app

    client = TestClient(app)
    client.headers = {"Authorization": "Bearer editor_token"}
    return client
