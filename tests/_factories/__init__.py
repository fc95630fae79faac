from .workout import (
    ParsedExerciseFactory,
    ParsedWorkoutFactory,
    WorkoutRefFactory,
    ExerciseRefFactory,
    TEST_USER_ID,
)
from .store import FakeWorkoutStore, StorageFailure

__all__ = [
    "ParsedExerciseFactory",
    "ParsedWorkoutFactory",
    "WorkoutRefFactory",
    "ExerciseRefFactory",
    "TEST_USER_ID",
    "FakeWorkoutStore",
    "StorageFailure",
]
