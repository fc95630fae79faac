"""Workout and exercise models, both parsed (from text) and stored."""

from datetime import date, datetime
from typing import Literal, Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Closed set of session categories
SessionType = Literal["PUSH", "PULL", "LEG"]

# Marker stored in `notes` for superset header lines
SUPERSET_NOTE = "SUPERSET"

# Date attribution for errors found before any valid date header
UNKNOWN_DATE = "Fecha desconocida"


class ParsedExercise(BaseModel):
    """One exercise line parsed from import text."""

    name: str
    sets: str
    weights: str
    notes: str | None = None
    is_superset: bool = False
    superset_exercises: list[str] | None = None


class ParsedWorkout(BaseModel):
    """A block of exercises under one date header.

    The parser never emits a workout with no exercises.
    """

    date: date
    session_type: SessionType = "PUSH"
    muscle_tags: list[str] = []
    exercises: list[ParsedExercise] = []


class ParseError(BaseModel):
    """A single line that could not be parsed."""

    model_config = ConfigDict(populate_by_name=True)

    line: str
    line_number: int = Field(alias="lineNumber")
    date: str = UNKNOWN_DATE
    error: str


class WorkoutRef(BaseModel):
    """A stored workout row."""

    id: UUID
    user_id: UUID
    date: date
    session_type: SessionType
    muscle_tags: list[str] = []
    created_at: datetime | None = None


class ExerciseRef(BaseModel):
    """A stored exercise row."""

    id: UUID
    workout_id: UUID
    name: str
    sets: str
    weights: str = ""
    notes: str | None = None
    position: int
    is_linked_to_previous: bool = False
    created_at: datetime | None = None


class WorkoutInput(BaseModel):
    """A workout created by hand rather than imported."""

    model_config = ConfigDict(populate_by_name=True)

    date: date
    session_type: SessionType = Field(alias="sessionType")
    muscle_tags: list[str] = Field(default=[], alias="muscleTags")


class WorkoutUpdate(BaseModel):
    """New session type and/or muscle tags for a stored workout."""

    model_config = ConfigDict(populate_by_name=True)

    session_type: SessionType | None = Field(default=None, alias="sessionType")
    muscle_tags: list[str] | None = Field(default=None, alias="muscleTags")

    @model_validator(mode="after")
    def require_a_change(self) -> Self:
        if self.session_type is None and self.muscle_tags is None:
            raise ValueError("Se requiere el tipo de sesión o los grupos musculares")
        return self


class ExerciseInput(BaseModel):
    """An exercise added by hand to the end of a workout."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    sets: str = Field(min_length=1)
    weights: str = ""
    notes: str | None = None
    is_linked_to_previous: bool = Field(default=False, alias="isLinkedToPrevious")


class ExerciseUpdate(BaseModel):
    """Fields to change on a stored exercise. Only the fields that are sent change."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, min_length=1)
    sets: str | None = Field(default=None, min_length=1)
    weights: str | None = None
    notes: str | None = None
    is_linked_to_previous: bool | None = Field(default=None, alias="isLinkedToPrevious")

    @field_validator("name", "sets", "weights", "is_linked_to_previous")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Este campo no puede ser nulo")
        return value


class ExerciseLinkUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    is_linked_to_previous: bool = Field(alias="isLinkedToPrevious")


class ExerciseLogEntry(BaseModel):
    """One stored exercise together with the date of its workout."""

    date: date
    name: str
    sets: str
    weights: str = ""


class ExerciseHistoryItem(BaseModel):
    """How often an exercise has been done and with what load."""

    name: str
    frequency: int
    last_used: date = Field(serialization_alias="lastUsed")
    avg_sets: int | None = Field(default=None, serialization_alias="avgSets")
    latest_weights: str = Field(default="", serialization_alias="latestWeights")
    max_weight_kg: float | None = Field(default=None, serialization_alias="maxWeightKg")


class WorkoutDetail(BaseModel):
    """A stored workout with its exercises ordered by position."""

    workout: WorkoutRef
    exercises: list[ExerciseRef]


class DuplicateConflict(BaseModel):
    """A parsed workout whose date is already taken by a stored workout."""

    date: date
    existing: WorkoutRef
    new: ParsedWorkout


DuplicateAction = Literal["ask", "skip", "overwrite", "merge"]
