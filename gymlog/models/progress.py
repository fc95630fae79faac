"""Physical progress (body weight and height) models."""

from datetime import date, datetime
from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, Field, model_validator


class ProgressEntry(BaseModel):
    """A stored body measurement for one day."""

    id: UUID
    user_id: UUID
    date: date
    weight: Optional[float] = None  # kg
    height: Optional[float] = None  # cm
    created_at: Optional[datetime] = None


class ProgressInput(BaseModel):
    """A new measurement. Must carry a weight, a height, or both."""

    date: date
    weight: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def require_weight_or_height(self) -> Self:
        if self.weight is None and self.height is None:
            raise ValueError("Se requiere al menos el peso o la altura")
        return self


class ProgressImportSummary(BaseModel):
    """Per-line outcome of a progress text import."""

    total: int
    success: int
    errors: int
    error_details: list[str] = Field(default=[], serialization_alias="errorDetails")
