"""Parser for the plain-text workout log format.

    🗓️Lunes, 3 marzo 2025 18:30

    Press Banca | 4x8 | 60kg
    Superserie: Curl y Martillo | 4x10 | 20kg y 15kg

    🗓️Miércoles, 5 marzo 2025
    ...

The parser is a two-state machine. Each input line is classified into a `LineEvent`
and fed to `WorkoutTextParser`, which is either IDLE (no valid date header seen yet)
or ACCUMULATING exercises into a pending workout. A pending workout is finalized,
classified and emitted when the next valid date header or the end of input arrives.
Line errors are collected, never raised; the whole input is always scanned.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from gymlog.models.workout import ParsedWorkout, ParseError, UNKNOWN_DATE
from .classifier import classify_session
from .dates import normalize_spanish_date
from .exercise_line import parse_exercise_line

logger = logging.getLogger(__name__)

# Calendar glyph, weekday, day, month name, year. Anything after the year is ignored.
DATE_HEADER_RE = re.compile(r"🗓️?\s*(\w+),?\s*(\d{1,2})\s+(\w+)\s+(\d{4})")
# Bare month names used as section dividers ("Marzo")
SECTION_HEADER_RE = re.compile(r"^[A-Za-z]+$")
# Fields of an exercise line ("Press Banca | 4x8 | 60kg")
EXERCISE_FIELD_SEPARATOR = "|"


class ParserState(Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"


class LineKind(Enum):
    BLANK = "blank"
    DATE_HEADER = "date_header"
    SECTION_HEADER = "section_header"
    EXERCISE = "exercise"
    OTHER = "other"


@dataclass
class LineEvent:
    kind: LineKind
    line_number: int  # 1-based, counted over the raw input including blank lines
    text: str  # trimmed
    date_match: Optional[re.Match[str]] = None


@dataclass
class WorkoutParseResult:
    workouts: list[ParsedWorkout] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)


def classify_line(line_number: int, raw_line: str) -> LineEvent:
    """Decide what a single input line is.

    Only lines with a pipe are exercise lines; the exercise parser decides whether
    they are well formed. Free text such as warm-up notes is OTHER and ignored.
    """
    text = raw_line.strip()
    if not text:
        return LineEvent(LineKind.BLANK, line_number, text)

    date_match = DATE_HEADER_RE.search(text)
    if date_match:
        return LineEvent(LineKind.DATE_HEADER, line_number, text, date_match)

    if SECTION_HEADER_RE.match(text):
        return LineEvent(LineKind.SECTION_HEADER, line_number, text)

    if EXERCISE_FIELD_SEPARATOR in text:
        return LineEvent(LineKind.EXERCISE, line_number, text)

    return LineEvent(LineKind.OTHER, line_number, text)


class WorkoutTextParser:
    """State machine that turns a stream of `LineEvent`s into workouts and errors."""

    def __init__(self) -> None:
        self.state = ParserState.IDLE
        self.pending: Optional[ParsedWorkout] = None
        # Date of the last valid header, used to attribute errors
        self.current_date: Optional[str] = None
        self.result = WorkoutParseResult()

    def feed(self, event: LineEvent) -> None:
        match event.kind:
            case LineKind.DATE_HEADER:
                self._on_date_header(event)
            case LineKind.EXERCISE:
                self._on_exercise(event)
            case LineKind.SECTION_HEADER | LineKind.BLANK | LineKind.OTHER:
                pass

    def finish(self) -> WorkoutParseResult:
        """Emit the pending workout, if any, and return everything collected."""
        self._emit_pending()
        self.state = ParserState.IDLE
        return self.result

    def _on_date_header(self, event: LineEvent) -> None:
        if event.date_match is None:
            raise ValueError(f"Line {event.line_number} is not a date header: {event.text!r}")
        _weekday, day, month_name, year = event.date_match.groups()
        try:
            workout_date = normalize_spanish_date(day, month_name, year)
        except ValueError as e:
            # Stay in the current state; the pending workout keeps its date
            self._record_error(event, f"Error al parsear la fecha: {e}")
            return

        self._emit_pending()
        self.current_date = workout_date.isoformat()
        self.pending = ParsedWorkout(date=workout_date, session_type="PUSH")
        self.state = ParserState.ACCUMULATING

    def _on_exercise(self, event: LineEvent) -> None:
        if self.state is ParserState.IDLE or self.pending is None:
            return
        try:
            exercise = parse_exercise_line(event.text)
        except ValueError as e:
            self._record_error(event, f"Error al parsear el ejercicio: {e}")
            return
        self.pending.exercises.append(exercise)

    def _emit_pending(self) -> None:
        """Classify and emit the pending workout; drop it if it has no exercises."""
        pending, self.pending = self.pending, None
        if pending is None:
            return
        if not pending.exercises:
            logger.debug(f"Dropping workout {pending.date} with no exercises")
            return
        classification = classify_session(pending.exercises)
        pending.session_type = classification.session_type
        pending.muscle_tags = classification.muscle_tags
        self.result.workouts.append(pending)

    def _record_error(self, event: LineEvent, message: str) -> None:
        logger.debug(f"Line {event.line_number}: {message}")
        self.result.errors.append(
            ParseError(
                line=event.text,
                line_number=event.line_number,
                date=self.current_date or UNKNOWN_DATE,
                error=message,
            )
        )


def parse_workout_text(text: str) -> WorkoutParseResult:
    """Parse a whole import text into workouts and line errors.

    Never raises for bad lines: every error in the input is collected. Callers must
    treat a non-empty `errors` list as blocking.
    """
    parser = WorkoutTextParser()
    for line_number, raw_line in enumerate(text.split("\n"), start=1):
        parser.feed(classify_line(line_number, raw_line))
    result = parser.finish()
    logger.info(
        f"Parsed {len(result.workouts)} workouts and {len(result.errors)} errors "
        f"from {text.count(chr(10)) + 1} lines"
    )
    return result
