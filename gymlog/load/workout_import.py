"""Import of parsed workouts into storage, with same-date duplicate resolution.

The import runs in four steps:

1. Any parse error blocks the import; nothing touches storage.
2. Every parsed workout is looked up by (user, date) to find collisions.
3. Collisions under the "ask" policy are returned to the caller, who must retry with
   an explicit policy.
4. Workouts are applied one at a time, in input order, as a left fold over an
   `ImportProgress` accumulator. Each storage call completes before the next starts.

Step 4 is not transactional. If a storage call fails, `WorkoutImportError` is raised
carrying the progress committed by earlier workouts; those rows stay in storage.
"""

import logging
from dataclasses import dataclass
from datetime import date
from functools import reduce
from typing import Callable, Optional, Protocol, Union
from uuid import UUID

from pydantic import BaseModel

from gymlog.models.workout import (
    DuplicateAction,
    DuplicateConflict,
    ExerciseRef,
    ParsedExercise,
    ParsedWorkout,
    ParseError,
    SessionType,
    WorkoutRef,
)
from gymlog.parsing.workout_text import WorkoutParseResult, parse_workout_text

logger = logging.getLogger(__name__)


class WorkoutStore(Protocol):
    """Storage operations the importer needs."""

    def find_workout(self, user_id: UUID, workout_date: date) -> Optional[WorkoutRef]: ...

    def insert_workout(
        self,
        user_id: UUID,
        workout_date: date,
        session_type: SessionType,
        muscle_tags: list[str],
    ) -> WorkoutRef: ...

    def delete_workout(self, workout_id: UUID) -> None: ...

    def max_exercise_position(self, workout_id: UUID) -> int: ...

    def insert_exercise(
        self,
        workout_id: UUID,
        name: str,
        sets: str,
        weights: str,
        notes: Optional[str],
        position: int,
        is_linked_to_previous: bool,
    ) -> ExerciseRef: ...


# --- Outcomes ---


class ParseErrorsOutcome(BaseModel):
    """The text had syntax errors; nothing was stored."""

    errors: list[ParseError]

    @property
    def message(self) -> str:
        return f"Se encontraron {len(self.errors)} errores durante la importación"


class DuplicatesOutcome(BaseModel):
    """Some dates already have workouts and no policy was chosen; nothing was stored."""

    duplicates: list[DuplicateConflict]

    @property
    def message(self) -> str:
        return f"Se encontraron {len(self.duplicates)} entrenamientos duplicados"


class ImportSummary(BaseModel):
    """Rows written by a completed import."""

    workouts: list[WorkoutRef]
    exercises: list[ExerciseRef]
    skipped: list[date]

    @property
    def message(self) -> str:
        message = (
            f"Se importaron {len(self.workouts)} entrenamientos "
            f"con {len(self.exercises)} ejercicios"
        )
        if self.skipped:
            message += f". Se omitieron {len(self.skipped)} entrenamientos duplicados"
        return message


ImportOutcome = Union[ParseErrorsOutcome, DuplicatesOutcome, ImportSummary]


@dataclass(frozen=True)
class ImportProgress:
    """What step 4 has written so far. Immutable; each step returns a new one."""

    workouts: tuple[WorkoutRef, ...] = ()
    exercises: tuple[ExerciseRef, ...] = ()
    skipped: tuple[date, ...] = ()

    def with_saved(
        self, workout: WorkoutRef, exercises: tuple[ExerciseRef, ...]
    ) -> "ImportProgress":
        return ImportProgress(
            workouts=self.workouts + (workout,),
            exercises=self.exercises + exercises,
            skipped=self.skipped,
        )

    def with_skipped(self, workout_date: date) -> "ImportProgress":
        return ImportProgress(
            workouts=self.workouts,
            exercises=self.exercises,
            skipped=self.skipped + (workout_date,),
        )

    def to_summary(self) -> ImportSummary:
        return ImportSummary(
            workouts=list(self.workouts),
            exercises=list(self.exercises),
            skipped=list(self.skipped),
        )


class WorkoutImportError(Exception):
    """A storage call failed while applying a workout.

    Attributes:
        workout_date: Date of the workout being applied when storage failed.
        cause: The underlying storage exception.
        committed: Progress written by earlier workouts. It is not rolled back.
    """

    def __init__(self, workout_date: date, cause: Exception, committed: ImportProgress):
        self.workout_date = workout_date
        self.cause = cause
        self.committed = committed
        super().__init__(
            f"Error al guardar el entrenamiento del {workout_date.isoformat()}: {cause}"
        )


# --- Steps ---


def find_duplicates(
    store: WorkoutStore, user_id: UUID, workouts: list[ParsedWorkout]
) -> list[DuplicateConflict]:
    """Look up every parsed workout's date and collect the ones already stored."""
    conflicts = []
    for workout in workouts:
        existing = store.find_workout(user_id, workout.date)
        if existing is not None:
            conflicts.append(
                DuplicateConflict(date=workout.date, existing=existing, new=workout)
            )
    return conflicts


def _insert_exercises(
    store: WorkoutStore,
    workout_id: UUID,
    exercises: list[ParsedExercise],
    position_for: Callable[[int], int],
) -> tuple[ExerciseRef, ...]:
    """Insert exercises one by one; `position_for(i)` is evaluated right before insert i."""

    def step(saved: tuple[ExerciseRef, ...], indexed: tuple[int, ParsedExercise]):
        i, exercise = indexed
        row = store.insert_exercise(
            workout_id=workout_id,
            name=exercise.name,
            sets=exercise.sets,
            weights=exercise.weights,
            notes=exercise.notes or None,
            position=position_for(i),
            is_linked_to_previous=exercise.is_superset,
        )
        return saved + (row,)

    return reduce(step, enumerate(exercises), ())


def _insert_new(
    store: WorkoutStore, user_id: UUID, workout: ParsedWorkout
) -> tuple[WorkoutRef, tuple[ExerciseRef, ...]]:
    row = store.insert_workout(
        user_id=user_id,
        workout_date=workout.date,
        session_type=workout.session_type,
        muscle_tags=workout.muscle_tags,
    )
    exercises = _insert_exercises(store, row.id, workout.exercises, lambda i: i + 1)
    return row, exercises


def _merge_into(
    store: WorkoutStore, existing: WorkoutRef, workout: ParsedWorkout
) -> tuple[ExerciseRef, ...]:
    # The max position is looked up again before every insert.
    return _insert_exercises(
        store,
        existing.id,
        workout.exercises,
        lambda i: store.max_exercise_position(existing.id) + 1 + i,
    )


def _apply_workout(
    store: WorkoutStore,
    user_id: UUID,
    action: DuplicateAction,
    conflicts: dict[date, DuplicateConflict],
) -> Callable[[ImportProgress, ParsedWorkout], ImportProgress]:
    """Build the fold step that writes one workout according to `action`."""

    def step(progress: ImportProgress, workout: ParsedWorkout) -> ImportProgress:
        conflict = conflicts.get(workout.date)
        try:
            if conflict is None:
                return progress.with_saved(*_insert_new(store, user_id, workout))

            if action == "skip":
                logger.info(f"Skipping workout {workout.date}: already exists")
                return progress.with_skipped(workout.date)

            if action == "merge":
                logger.info(
                    f"Merging {len(workout.exercises)} exercises into workout "
                    f"{conflict.existing.id} ({workout.date})"
                )
                exercises = _merge_into(store, conflict.existing, workout)
                return progress.with_saved(conflict.existing, exercises)

            # overwrite; exercise rows are removed by the storage-level cascade
            logger.info(f"Overwriting workout {conflict.existing.id} ({workout.date})")
            store.delete_workout(conflict.existing.id)
            return progress.with_saved(*_insert_new(store, user_id, workout))
        except Exception as e:
            logger.error(
                f"Failed to save workout {workout.date}: {type(e).__name__}: {str(e)}",
                exc_info=True,
            )
            raise WorkoutImportError(workout.date, e, progress) from e

    return step


def import_parse_result(
    store: WorkoutStore,
    user_id: UUID,
    parsed: WorkoutParseResult,
    duplicate_action: DuplicateAction = "ask",
) -> ImportOutcome:
    """Run steps 1-4 over an already parsed text.

    Raises:
        WorkoutImportError: A storage call failed in step 4.
    """
    if parsed.errors:
        logger.info(f"Import blocked by {len(parsed.errors)} parse errors")
        return ParseErrorsOutcome(errors=parsed.errors)

    conflicts = find_duplicates(store, user_id, parsed.workouts)
    if conflicts and duplicate_action == "ask":
        logger.info(f"Import paused on {len(conflicts)} duplicate dates")
        return DuplicatesOutcome(duplicates=conflicts)

    conflicts_by_date = {c.date: c for c in conflicts}
    progress = reduce(
        _apply_workout(store, user_id, duplicate_action, conflicts_by_date),
        parsed.workouts,
        ImportProgress(),
    )
    logger.info(
        f"Imported {len(progress.workouts)} workouts with {len(progress.exercises)} "
        f"exercises for user {user_id} ({len(progress.skipped)} skipped)"
    )
    return progress.to_summary()


def import_workouts(
    store: WorkoutStore,
    user_id: UUID,
    text: str,
    duplicate_action: DuplicateAction = "ask",
) -> ImportOutcome:
    """Parse `text` and import its workouts for `user_id`.

    Args:
        store: Storage the workouts are written to.
        user_id: Owner of the imported workouts.
        text: Raw workout log text.
        duplicate_action: What to do with dates that already have a workout.

    Returns:
        `ParseErrorsOutcome` or `DuplicatesOutcome` when the import stopped before
        writing anything, otherwise an `ImportSummary`.

    Raises:
        WorkoutImportError: A storage call failed. Earlier workouts stay committed.
    """
    return import_parse_result(
        store, user_id, parse_workout_text(text), duplicate_action
    )
