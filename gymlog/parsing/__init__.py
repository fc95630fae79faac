from .errors import UnrecognizedMonthError, MalformedLineError
from .dates import normalize_spanish_date, to_iso_date, month_number
from .exercise_line import (
    parse_exercise_line,
    normalize_sets,
    normalize_weights,
    SetsText,
    WeightsText,
)
from .classifier import classify_session, SessionClassification
from .workout_text import parse_workout_text, WorkoutParseResult, WorkoutTextParser
from .progress_text import (
    parse_progress_line,
    format_progress_line,
    format_progress_text,
)

__all__ = [
    "UnrecognizedMonthError",
    "MalformedLineError",
    "normalize_spanish_date",
    "to_iso_date",
    "month_number",
    "parse_exercise_line",
    "normalize_sets",
    "normalize_weights",
    "SetsText",
    "WeightsText",
    "classify_session",
    "SessionClassification",
    "parse_workout_text",
    "WorkoutParseResult",
    "WorkoutTextParser",
    "parse_progress_line",
    "format_progress_line",
    "format_progress_text",
]
