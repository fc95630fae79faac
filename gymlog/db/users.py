"""Database operations for users."""

import logging
from typing import Optional
from uuid import UUID

from gymlog.models.user import User
from .connection import get_db_cursor

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, idp_user_id, email, username, role, created_at, updated_at"


def get_user_by_idp_id(idp_user_id: UUID) -> Optional[User]:
    """Get a user by their identity provider ID (the JWT 'sub' claim)."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"SELECT {_USER_COLUMNS} FROM users WHERE idp_user_id = %s",
            (str(idp_user_id),),
        )
        row = cursor.fetchone()
        return _row_to_user(row) if row else None


def get_or_create_user(
    idp_user_id: UUID,
    email: Optional[str],
    username: Optional[str],
) -> User:
    """Get the user for a login, creating it with the 'viewer' role on first login.

    The cached email and username are refreshed from the token on every call; the
    role of an existing user is never changed here.
    """
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            INSERT INTO users (idp_user_id, email, username, role)
            VALUES (%s, %s, %s, 'viewer')
            ON CONFLICT (idp_user_id)
            DO UPDATE SET
                email = EXCLUDED.email,
                username = EXCLUDED.username
            RETURNING {_USER_COLUMNS}
            """,
            (str(idp_user_id), email, username),
        )
        row = cursor.fetchone()
        if row is None:
            raise RuntimeError(f"Failed to upsert user idp_user_id={idp_user_id}")
        user = _row_to_user(row)
        logger.debug(f"Resolved user id={user.id} for idp_user_id={idp_user_id}")
        return user


def _row_to_user(row) -> User:
    id, idp_user_id, email, username, role, created_at, updated_at = row
    return User(
        id=id,
        idp_user_id=idp_user_id,
        email=email,
        username=username,
        role=role,
        created_at=created_at,
        updated_at=updated_at,
    )
