from gymlog.db.workouts import PostgresWorkoutStore
from gymlog.load.workout_import import WorkoutStore


def workout_store() -> WorkoutStore:
    """Storage used by the text importer."""
    return PostgresWorkoutStore()
