"""Subjective wellness tracking models."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator


# Allowed ranges and the message shown when a value falls outside them
_SCORE_RANGES: dict[str, tuple[float, float, str]] = {
    "energy_level": (1, 10, "Nivel de energía debe estar entre 1 y 10"),
    "stress_level": (1, 10, "Nivel de estrés debe estar entre 1 y 10"),
    "sleep_hours": (0, 14, "Horas de sueño deben estar entre 0 y 14"),
    "sleep_quality": (1, 10, "Calidad del sueño debe estar entre 1 y 10"),
    "muscle_soreness": (1, 10, "Dolor muscular debe estar entre 1 y 10"),
    "motivation_level": (1, 10, "Nivel de motivación debe estar entre 1 y 10"),
}


def _check_range(field: str, value: Optional[float]) -> Optional[float]:
    if value is None:
        return value
    low, high, message = _SCORE_RANGES[field]
    if value < low or value > high:
        raise ValueError(message)
    return value


class WellnessEntry(BaseModel):
    """A stored wellness log for one day."""

    id: int
    user_id: UUID
    date: date
    energy_level: int
    stress_level: int
    sleep_hours: float
    sleep_quality: int
    muscle_soreness: int
    motivation_level: int
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class WellnessInput(BaseModel):
    """A new wellness log. Every score is validated before it reaches the database."""

    date: date
    energy_level: int
    stress_level: int
    sleep_hours: float
    sleep_quality: int
    muscle_soreness: int
    motivation_level: int
    notes: Optional[str] = None

    @field_validator(*_SCORE_RANGES)
    @classmethod
    def validate_range(cls, v, info):
        return _check_range(info.field_name, v)


class WellnessUpdate(BaseModel):
    """A partial update; only the provided fields are changed."""

    energy_level: Optional[int] = None
    stress_level: Optional[int] = None
    sleep_hours: Optional[float] = None
    sleep_quality: Optional[int] = None
    muscle_soreness: Optional[int] = None
    motivation_level: Optional[int] = None
    notes: Optional[str] = None

    @field_validator(*_SCORE_RANGES)
    @classmethod
    def validate_range(cls, v, info):
        return _check_range(info.field_name, v)
