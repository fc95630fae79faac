"""Factories for workout and exercise test data."""

from typing import Any, Mapping
from datetime import date, datetime
from uuid import UUID, uuid4

from gymlog.models.workout import ExerciseRef, ParsedExercise, ParsedWorkout, WorkoutRef

TEST_USER_ID = UUID("00000000-0000-0000-0000-000000000001")


class ParsedExerciseFactory:
    """Factory for creating ParsedExercise test instances."""

    def __init__(self):
        self.default = ParsedExercise(name="Press Banca", sets="4x8", weights="60kg")

    def make(self, update: Mapping[str, Any] | None = None) -> ParsedExercise:
        return self.default.model_copy(deep=True, update=update)


class ParsedWorkoutFactory:
    """Factory for creating ParsedWorkout test instances."""

    def __init__(self):
        exercise_factory = ParsedExerciseFactory()
        self.default = ParsedWorkout(
            date=date(2025, 3, 3),
            session_type="PUSH",
            muscle_tags=["Pecho"],
            exercises=[
                exercise_factory.make(),
                exercise_factory.make({"name": "Press Militar", "weights": "30kg"}),
            ],
        )

    def make(
        self,
        update: Mapping[str, Any] | None = None,
        exercises: list[ParsedExercise] | None = None,
    ) -> ParsedWorkout:
        workout = self.default.model_copy(deep=True, update=update)
        if exercises is not None:
            workout = workout.model_copy(update={"exercises": exercises})
        return workout


class WorkoutRefFactory:
    """Factory for creating stored WorkoutRef test instances."""

    def __init__(self):
        self.default = WorkoutRef(
            id=UUID("10000000-0000-0000-0000-000000000001"),
            user_id=TEST_USER_ID,
            date=date(2025, 3, 3),
            session_type="PUSH",
            muscle_tags=["Pecho"],
            created_at=datetime(2025, 3, 3, 20, 0, 0),
        )

    def make(self, update: Mapping[str, Any] | None = None) -> WorkoutRef:
        default_update: dict[str, Any] = {"id": uuid4()}
        if update:
            default_update.update(update)
        return self.default.model_copy(deep=True, update=default_update)


class ExerciseRefFactory:
    """Factory for creating stored ExerciseRef test instances."""

    def __init__(self):
        self.default = ExerciseRef(
            id=UUID("20000000-0000-0000-0000-000000000001"),
            workout_id=UUID("10000000-0000-0000-0000-000000000001"),
            name="Press Banca",
            sets="4x8",
            weights="60kg",
            notes=None,
            position=1,
            is_linked_to_previous=False,
            created_at=datetime(2025, 3, 3, 20, 0, 0),
        )

    def make(self, update: Mapping[str, Any] | None = None) -> ExerciseRef:
        default_update: dict[str, Any] = {"id": uuid4()}
        if update:
            default_update.update(update)
        return self.default.model_copy(deep=True, update=default_update)
