"""Database operations for physical progress (weight/height) entries."""

import logging
from uuid import UUID

from .connection import get_db_cursor
from gymlog.models.progress import ProgressEntry, ProgressInput

logger = logging.getLogger(__name__)

_PROGRESS_COLUMNS = "id, user_id, date, weight, height, created_at"


def get_progress(user_id: UUID) -> list[ProgressEntry]:
    """Get the user's measurements, newest first."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_PROGRESS_COLUMNS}
            FROM physical_progress
            WHERE user_id = %s
            ORDER BY date DESC
            """,
            (user_id,),
        )
        return [_row_to_progress(row) for row in cursor.fetchall()]


def upsert_progress(user_id: UUID, entry: ProgressInput) -> ProgressEntry:
    """Store a measurement, replacing any existing one for the same date."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            INSERT INTO physical_progress (user_id, date, weight, height)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (user_id, date)
            DO UPDATE SET
                weight = EXCLUDED.weight,
                height = EXCLUDED.height
            RETURNING {_PROGRESS_COLUMNS}
            """,
            (user_id, entry.date, entry.weight, entry.height),
        )
        row = cursor.fetchone()
        if row is None:
            raise RuntimeError(f"Failed to upsert progress for {entry.date}")
        return _row_to_progress(row)


def delete_progress(user_id: UUID, progress_id: UUID) -> bool:
    """Delete one of the user's measurements. Returns True if a row was deleted."""
    with get_db_cursor() as cursor:
        cursor.execute(
            "DELETE FROM physical_progress WHERE id = %s AND user_id = %s",
            (progress_id, user_id),
        )
        return cursor.rowcount > 0


def _row_to_progress(row) -> ProgressEntry:
    id, user_id, entry_date, weight, height, created_at = row
    return ProgressEntry(
        id=id,
        user_id=user_id,
        date=entry_date,
        weight=weight,
        height=height,
        created_at=created_at,
    )
