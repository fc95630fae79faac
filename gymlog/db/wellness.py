"""Database operations for wellness tracking entries."""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from psycopg import sql

from .connection import get_db_cursor
from gymlog.models.wellness import WellnessEntry, WellnessInput, WellnessUpdate

logger = logging.getLogger(__name__)

_WELLNESS_COLUMNS = (
    "id, user_id, date, energy_level, stress_level, sleep_hours, sleep_quality, "
    "muscle_soreness, motivation_level, notes, created_at"
)


def get_wellness_entries(user_id: UUID) -> list[WellnessEntry]:
    """Get the user's wellness entries, newest first."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_WELLNESS_COLUMNS}
            FROM wellness_tracking
            WHERE user_id = %s
            ORDER BY date DESC
            """,
            (user_id,),
        )
        return [_row_to_wellness(row) for row in cursor.fetchall()]


def get_wellness_by_date(user_id: UUID, entry_date: date) -> Optional[WellnessEntry]:
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_WELLNESS_COLUMNS}
            FROM wellness_tracking
            WHERE user_id = %s AND date = %s
            """,
            (user_id, entry_date),
        )
        row = cursor.fetchone()
        return _row_to_wellness(row) if row else None


def create_wellness_entry(user_id: UUID, entry: WellnessInput) -> WellnessEntry:
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            INSERT INTO wellness_tracking (
                user_id, date, energy_level, stress_level, sleep_hours,
                sleep_quality, muscle_soreness, motivation_level, notes
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING {_WELLNESS_COLUMNS}
            """,
            (
                user_id,
                entry.date,
                entry.energy_level,
                entry.stress_level,
                entry.sleep_hours,
                entry.sleep_quality,
                entry.muscle_soreness,
                entry.motivation_level,
                entry.notes,
            ),
        )
        row = cursor.fetchone()
        if row is None:
            raise RuntimeError(f"Failed to insert wellness entry for {entry.date}")
        return _row_to_wellness(row)


def update_wellness_entry(
    user_id: UUID, entry_id: int, update: WellnessUpdate
) -> Optional[WellnessEntry]:
    """Apply the fields set on `update` to one of the user's entries.

    Returns:
        The updated entry, or None if it doesn't exist.

    Raises:
        ValueError: If `update` sets no fields.
    """
    fields = update.model_dump(exclude_unset=True)
    if not fields:
        raise ValueError("No fields to update")

    assignments = sql.SQL(", ").join(
        sql.SQL("{} = %s").format(sql.Identifier(name)) for name in fields
    )
    query = sql.SQL(
        "UPDATE wellness_tracking SET {assignments} "
        "WHERE id = %s AND user_id = %s RETURNING " + _WELLNESS_COLUMNS
    ).format(assignments=assignments)

    with get_db_cursor() as cursor:
        cursor.execute(query, [*fields.values(), entry_id, user_id])
        row = cursor.fetchone()
        return _row_to_wellness(row) if row else None


def delete_wellness_entry(user_id: UUID, entry_id: int) -> bool:
    with get_db_cursor() as cursor:
        cursor.execute(
            "DELETE FROM wellness_tracking WHERE id = %s AND user_id = %s",
            (entry_id, user_id),
        )
        return cursor.rowcount > 0


def _row_to_wellness(row) -> WellnessEntry:
    (
        id,
        user_id,
        entry_date,
        energy_level,
        stress_level,
        sleep_hours,
        sleep_quality,
        muscle_soreness,
        motivation_level,
        notes,
        created_at,
    ) = row
    return WellnessEntry(
        id=id,
        user_id=user_id,
        date=entry_date,
        energy_level=energy_level,
        stress_level=stress_level,
        sleep_hours=sleep_hours,
        sleep_quality=sleep_quality,
        muscle_soreness=muscle_soreness,
        motivation_level=motivation_level,
        notes=notes,
        created_at=created_at,
    )
