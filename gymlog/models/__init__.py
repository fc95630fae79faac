from .user import User, Role
from .workout import (
    SessionType,
    ParsedExercise,
    ParsedWorkout,
    ParseError,
    WorkoutRef,
    ExerciseRef,
    WorkoutDetail,
    WorkoutInput,
    WorkoutUpdate,
    ExerciseInput,
    ExerciseUpdate,
    ExerciseLinkUpdate,
    ExerciseLogEntry,
    ExerciseHistoryItem,
    DuplicateConflict,
    DuplicateAction,
    SUPERSET_NOTE,
    UNKNOWN_DATE,
)
from .progress import ProgressEntry, ProgressInput, ProgressImportSummary
from .wellness import WellnessEntry, WellnessInput, WellnessUpdate


__all__ = [
    "User",
    "Role",
    "SessionType",
    "ParsedExercise",
    "ParsedWorkout",
    "ParseError",
    "WorkoutRef",
    "ExerciseRef",
    "WorkoutDetail",
    "WorkoutInput",
    "WorkoutUpdate",
    "ExerciseInput",
    "ExerciseUpdate",
    "ExerciseLinkUpdate",
    "ExerciseLogEntry",
    "ExerciseHistoryItem",
    "DuplicateConflict",
    "DuplicateAction",
    "SUPERSET_NOTE",
    "UNKNOWN_DATE",
    "ProgressEntry",
    "ProgressInput",
    "ProgressImportSummary",
    "WellnessEntry",
    "WellnessInput",
    "WellnessUpdate",
]
