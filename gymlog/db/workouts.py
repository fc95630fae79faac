"""Database operations for workouts and their exercises."""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from psycopg import sql

from .connection import get_db_cursor
from gymlog.models.workout import (
    ExerciseInput,
    ExerciseLinkUpdate,
    ExerciseLogEntry,
    ExerciseRef,
    ExerciseUpdate,
    SessionType,
    WorkoutDetail,
    WorkoutRef,
    WorkoutUpdate,
)

logger = logging.getLogger(__name__)

_WORKOUT_COLUMNS = "id, user_id, date, session_type, muscle_tags, created_at"
_EXERCISE_COLUMNS = (
    "id, workout_id, name, sets, weights, notes, position, "
    "is_linked_to_previous, created_at"
)
_PREFIXED_EXERCISE_COLUMNS = ", ".join("e." + c for c in _EXERCISE_COLUMNS.split(", "))


# --- Workouts ---


def find_workout(user_id: UUID, workout_date: date) -> Optional[WorkoutRef]:
    """Get the user's workout on a date, if there is one."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_WORKOUT_COLUMNS}
            FROM workouts
            WHERE user_id = %s AND date = %s
            """,
            (user_id, workout_date),
        )
        row = cursor.fetchone()
        return _row_to_workout(row) if row else None


def get_workouts(
    user_id: UUID,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[WorkoutRef]:
    """Get the user's workouts, newest first.

    Args:
        user_id: Owner of the workouts.
        start_date: If provided, only workouts on or after this date.
        end_date: If provided, only workouts on or before this date.
    """
    conditions: list[sql.Composable] = [sql.SQL("user_id = %s")]
    params: list = [user_id]

    if start_date is not None:
        conditions.append(sql.SQL("date >= %s"))
        params.append(start_date)
    if end_date is not None:
        conditions.append(sql.SQL("date <= %s"))
        params.append(end_date)

    query = sql.SQL(
        "SELECT " + _WORKOUT_COLUMNS + """
        FROM workouts
        WHERE {where_clause}
        ORDER BY date DESC
        """
    ).format(where_clause=sql.SQL(" AND ").join(conditions))

    with get_db_cursor() as cursor:
        cursor.execute(query, params)
        return [_row_to_workout(row) for row in cursor.fetchall()]


def insert_workout(
    user_id: UUID,
    workout_date: date,
    session_type: SessionType,
    muscle_tags: list[str],
) -> WorkoutRef:
    """Create a workout row. Fails if the user already has a workout on that date."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            INSERT INTO workouts (user_id, date, session_type, muscle_tags)
            VALUES (%s, %s, %s, %s)
            RETURNING {_WORKOUT_COLUMNS}
            """,
            (user_id, workout_date, session_type, list(muscle_tags)),
        )
        row = cursor.fetchone()
        if row is None:
            raise RuntimeError(f"Failed to insert workout for {workout_date}")
        return _row_to_workout(row)


def delete_workout(workout_id: UUID) -> bool:
    """Delete a workout. Its exercises go with it (ON DELETE CASCADE).

    Returns:
        True if a row was deleted.
    """
    with get_db_cursor() as cursor:
        cursor.execute("DELETE FROM workouts WHERE id = %s", (workout_id,))
        deleted = cursor.rowcount > 0
    if deleted:
        logger.info(f"Deleted workout {workout_id}")
    return deleted


def get_workout_detail(user_id: UUID, workout_date: date) -> Optional[WorkoutDetail]:
    """Get the user's workout on a date with its exercises in position order."""
    workout = find_workout(user_id, workout_date)
    if workout is None:
        return None
    return WorkoutDetail(workout=workout, exercises=get_exercises(workout.id))


def update_workout(
    user_id: UUID, workout_date: date, update: WorkoutUpdate
) -> Optional[WorkoutRef]:
    """Change the session type and/or muscle tags of the user's workout on a date.

    Returns:
        The updated workout, or None if there is no workout on that date.
    """
    fields = update.model_dump(exclude_none=True)
    assignments = sql.SQL(", ").join(
        sql.SQL("{} = %s").format(sql.Identifier(name)) for name in fields
    )
    query = sql.SQL(
        "UPDATE workouts SET {assignments} "
        "WHERE user_id = %s AND date = %s RETURNING " + _WORKOUT_COLUMNS
    ).format(assignments=assignments)

    with get_db_cursor() as cursor:
        cursor.execute(query, [*fields.values(), user_id, workout_date])
        row = cursor.fetchone()
        return _row_to_workout(row) if row else None


# --- Exercises ---


def get_exercises(workout_id: UUID) -> list[ExerciseRef]:
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_EXERCISE_COLUMNS}
            FROM exercises
            WHERE workout_id = %s
            ORDER BY position ASC
            """,
            (workout_id,),
        )
        return [_row_to_exercise(row) for row in cursor.fetchall()]


def max_exercise_position(workout_id: UUID) -> int:
    """Highest exercise position in a workout, or 0 if it has no exercises."""
    with get_db_cursor() as cursor:
        cursor.execute(
            "SELECT COALESCE(MAX(position), 0) FROM exercises WHERE workout_id = %s",
            (workout_id,),
        )
        row = cursor.fetchone()
        return row[0] if row else 0


def insert_exercise(
    workout_id: UUID,
    name: str,
    sets: str,
    weights: str,
    notes: Optional[str],
    position: int,
    is_linked_to_previous: bool,
) -> ExerciseRef:
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            INSERT INTO exercises (
                workout_id, name, sets, weights, notes, position, is_linked_to_previous
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            RETURNING {_EXERCISE_COLUMNS}
            """,
            (workout_id, name, sets, weights, notes, position, is_linked_to_previous),
        )
        row = cursor.fetchone()
        if row is None:
            raise RuntimeError(f"Failed to insert exercise {name!r}")
        return _row_to_exercise(row)


def set_exercise_link(
    user_id: UUID, exercise_id: UUID, is_linked_to_previous: bool
) -> Optional[ExerciseRef]:
    """Link or unlink an exercise to the previous one (superset chains).

    Returns:
        The updated exercise, or None if it doesn't exist or isn't the user's.
    """
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            UPDATE exercises e
            SET is_linked_to_previous = %s
            FROM workouts w
            WHERE e.id = %s AND e.workout_id = w.id AND w.user_id = %s
            RETURNING {_PREFIXED_EXERCISE_COLUMNS}
            """,
            (is_linked_to_previous, exercise_id, user_id),
        )
        row = cursor.fetchone()
        return _row_to_exercise(row) if row else None


def add_exercise(workout_id: UUID, exercise: ExerciseInput) -> ExerciseRef:
    """Append an exercise after the last one in the workout."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            INSERT INTO exercises (
                workout_id, name, sets, weights, notes, position, is_linked_to_previous
            )
            SELECT %s, %s, %s, %s, %s, COALESCE(MAX(position), 0) + 1, %s
            FROM exercises
            WHERE workout_id = %s
            RETURNING {_EXERCISE_COLUMNS}
            """,
            (
                workout_id,
                exercise.name,
                exercise.sets,
                exercise.weights,
                exercise.notes,
                exercise.is_linked_to_previous,
                workout_id,
            ),
        )
        row = cursor.fetchone()
        if row is None:
            raise RuntimeError(f"Failed to insert exercise {exercise.name!r}")
        return _row_to_exercise(row)


def update_exercise(
    user_id: UUID, exercise_id: UUID, update: ExerciseUpdate
) -> Optional[ExerciseRef]:
    """Apply the fields set on `update` to one of the user's exercises.

    Returns:
        The updated exercise, or None if it doesn't exist or isn't the user's.

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
        "UPDATE exercises e SET {assignments} FROM workouts w "
        "WHERE e.id = %s AND e.workout_id = w.id AND w.user_id = %s "
        "RETURNING " + _PREFIXED_EXERCISE_COLUMNS
    ).format(assignments=assignments)

    with get_db_cursor() as cursor:
        cursor.execute(query, [*fields.values(), exercise_id, user_id])
        row = cursor.fetchone()
        return _row_to_exercise(row) if row else None


def delete_exercise(user_id: UUID, exercise_id: UUID) -> bool:
    """Delete one of the user's exercises. The other positions are left as they are.

    Returns:
        True if a row was deleted.
    """
    with get_db_cursor() as cursor:
        cursor.execute(
            """
            DELETE FROM exercises e
            USING workouts w
            WHERE e.id = %s AND e.workout_id = w.id AND w.user_id = %s
            """,
            (exercise_id, user_id),
        )
        return cursor.rowcount > 0


def reorder_exercises(workout_id: UUID, exercise_ids: list[UUID]) -> list[ExerciseRef]:
    """Renumber a workout's exercises 1..n in the order given.

    All positions change in one transaction.

    Raises:
        ValueError: If `exercise_ids` is not exactly the workout's exercises.
    """
    with get_db_cursor() as cursor:
        cursor.execute("SELECT id FROM exercises WHERE workout_id = %s", (workout_id,))
        current_ids = {row[0] for row in cursor.fetchall()}
        if len(exercise_ids) != len(current_ids) or set(exercise_ids) != current_ids:
            raise ValueError("The new order must list every exercise of the workout once")

        for position, exercise_id in enumerate(exercise_ids, start=1):
            cursor.execute(
                "UPDATE exercises SET position = %s WHERE id = %s",
                (position, exercise_id),
            )

        cursor.execute(
            f"""
            SELECT {_EXERCISE_COLUMNS}
            FROM exercises
            WHERE workout_id = %s
            ORDER BY position ASC
            """,
            (workout_id,),
        )
        return [_row_to_exercise(row) for row in cursor.fetchall()]


def set_exercise_links(
    user_id: UUID, updates: list[ExerciseLinkUpdate]
) -> Optional[list[ExerciseRef]]:
    """Set `is_linked_to_previous` on several exercises at once.

    Either every update is applied or none is.

    Returns:
        The updated exercises in request order, or None if any of them doesn't exist
        or isn't the user's.
    """
    exercise_ids = [update.id for update in updates]
    with get_db_cursor() as cursor:
        cursor.execute(
            """
            SELECT COUNT(*)
            FROM exercises e
            JOIN workouts w ON e.workout_id = w.id
            WHERE e.id = ANY(%s) AND w.user_id = %s
            """,
            (exercise_ids, user_id),
        )
        row = cursor.fetchone()
        if row is None or row[0] != len(set(exercise_ids)):
            return None

        exercises = []
        for update in updates:
            cursor.execute(
                f"""
                UPDATE exercises
                SET is_linked_to_previous = %s
                WHERE id = %s
                RETURNING {_EXERCISE_COLUMNS}
                """,
                (update.is_linked_to_previous, update.id),
            )
            exercises.append(_row_to_exercise(cursor.fetchone()))
        return exercises


def get_exercise_log(
    user_id: UUID, session_type: Optional[SessionType] = None
) -> list[ExerciseLogEntry]:
    """Every exercise the user has logged, most recent workout first.

    Args:
        user_id: Owner of the workouts.
        session_type: If provided, only exercises from workouts of this type.
    """
    conditions: list[sql.Composable] = [sql.SQL("w.user_id = %s")]
    params: list = [user_id]
    if session_type is not None:
        conditions.append(sql.SQL("w.session_type = %s"))
        params.append(session_type)

    query = sql.SQL(
        """
        SELECT w.date, e.name, e.sets, e.weights
        FROM exercises e
        JOIN workouts w ON e.workout_id = w.id
        WHERE {where_clause}
        ORDER BY w.date DESC, e.position ASC
        """
    ).format(where_clause=sql.SQL(" AND ").join(conditions))

    with get_db_cursor() as cursor:
        cursor.execute(query, params)
        return [
            ExerciseLogEntry(date=workout_date, name=name, sets=sets, weights=weights or "")
            for workout_date, name, sets, weights in cursor.fetchall()
        ]


class PostgresWorkoutStore:
    """`WorkoutStore` for the importer, backed by the functions in this module.

    Every call is its own transaction, so workouts written earlier in an import stay
    committed if a later call fails.
    """

    def find_workout(self, user_id: UUID, workout_date: date) -> Optional[WorkoutRef]:
        return find_workout(user_id, workout_date)

    def insert_workout(
        self,
        user_id: UUID,
        workout_date: date,
        session_type: SessionType,
        muscle_tags: list[str],
    ) -> WorkoutRef:
        return insert_workout(user_id, workout_date, session_type, muscle_tags)

    def delete_workout(self, workout_id: UUID) -> None:
        delete_workout(workout_id)

    def max_exercise_position(self, workout_id: UUID) -> int:
        return max_exercise_position(workout_id)

    def insert_exercise(
        self,
        workout_id: UUID,
        name: str,
        sets: str,
        weights: str,
        notes: Optional[str],
        position: int,
        is_linked_to_previous: bool,
    ) -> ExerciseRef:
        return insert_exercise(
            workout_id, name, sets, weights, notes, position, is_linked_to_previous
        )


def _row_to_workout(row) -> WorkoutRef:
    id, user_id, workout_date, session_type, muscle_tags, created_at = row
    return WorkoutRef(
        id=id,
        user_id=user_id,
        date=workout_date,
        session_type=session_type,
        muscle_tags=muscle_tags or [],
        created_at=created_at,
    )


def _row_to_exercise(row) -> ExerciseRef:
    (
        id,
        workout_id,
        name,
        sets,
        weights,
        notes,
        position,
        is_linked_to_previous,
        created_at,
    ) = row
    return ExerciseRef(
        id=id,
        workout_id=workout_id,
        name=name,
        sets=sets,
        weights=weights or "",
        notes=notes,
        position=position,
        is_linked_to_previous=is_linked_to_previous,
        created_at=created_at,
    )
