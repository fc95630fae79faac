"""Parsing of a single `Name | Sets | Weights` exercise line.

Sets and weights are kept as display strings. The source notation is free text
("4x8 y 4x12", "10,10,8", "50kg y 7.5kg cada", "sin peso") and must survive a round
trip, so normalization only rewrites the shapes it understands. `SetsText` and
`WeightsText` give a structured view on top of the string without replacing it.
"""

import re
from dataclasses import dataclass
from typing import Optional

from gymlog.models.workout import ParsedExercise, SUPERSET_NOTE
from .errors import MalformedLineError

SUPERSET_TOKEN = "superserie:"
SUPERSET_PREFIX_RE = re.compile(r"^Superserie:\s*", re.IGNORECASE)
SUPERSET_SEPARATOR = " y "
NO_WEIGHT = "Sin Peso"

_NUMBER_RE = re.compile(r"(\d+(?:\.\d+)?)")
_KG_RE = re.compile(r"\d+(?:\.\d+)?kg")
_FILLER_RE = re.compile(r"\s*(cada|por)\s*", re.IGNORECASE)
_BAR_RE = re.compile(r"\s*\+\s*Barra", re.IGNORECASE)
_LEADING_COUNT_RE = re.compile(r"^\s*(\d+)")


def normalize_sets(sets_text: str) -> str:
    """Rewrite a sets field into `NxR` form where the shape is recognized.

    A comma list such as "10,10,8" becomes "3x10": the count of values and the
    first value only. Reps after the first are dropped.
    """
    if not sets_text:
        return "1"

    # Dual superset notation ("4x8 y 4x12") is kept verbatim
    if SUPERSET_SEPARATOR in sets_text:
        return sets_text

    if "x" in sets_text and "," not in sets_text:
        return sets_text

    if "," in sets_text:
        reps = [r.strip() for r in sets_text.split(",") if r.strip()]
        return f"{len(reps)}x{reps[0]}"

    match = re.search(r"(\d+)", sets_text)
    if match:
        return f"{match.group(1)}x1"

    return sets_text


def normalize_weights(weights_text: str) -> str:
    """Rewrite a weights field into kg notation where the shape is recognized."""
    if not weights_text:
        return ""

    if "sin peso" in weights_text.lower():
        return NO_WEIGHT

    # Dual superset weights ("50kg y 7.5kg cada") are kept verbatim
    if SUPERSET_SEPARATOR in weights_text:
        return weights_text

    normalized = _FILLER_RE.sub("", weights_text)
    if "+ Barra" in normalized:
        normalized = _BAR_RE.sub("", normalized)

    # "4x 40kg 45kg" style: keep just the per-set weights
    if "x" in normalized and "kg" in normalized:
        weights = _KG_RE.findall(normalized)
        if weights:
            return ",".join(weights)

    if re.search(r"\d", normalized) and "kg" not in normalized:
        normalized = _NUMBER_RE.sub(r"\1kg", normalized)

    return normalized


@dataclass(frozen=True)
class SetsText:
    """A sets display string with a structured view of its counts."""

    text: str

    @classmethod
    def parse(cls, raw: str) -> "SetsText":
        return cls(normalize_sets(raw.strip()))

    def format(self) -> str:
        return self.text

    @property
    def set_count(self) -> Optional[int]:
        """The leading number of sets ("4" in "4x8" or in "4x8 y 4x12")."""
        match = _LEADING_COUNT_RE.match(self.text)
        return int(match.group(1)) if match else None


@dataclass(frozen=True)
class WeightsText:
    """A weights display string with a structured view of the kg values in it."""

    text: str

    @classmethod
    def parse(cls, raw: str) -> "WeightsText":
        return cls(normalize_weights(raw.strip()))

    def format(self) -> str:
        return self.text

    @property
    def is_bodyweight(self) -> bool:
        return self.text == NO_WEIGHT

    @property
    def per_set_kg(self) -> list[float]:
        """Every `<number>kg` value in order of appearance."""
        return [float(w[:-2]) for w in _KG_RE.findall(self.text)]


def split_superset(name: str) -> list[str]:
    """Constituent exercise names of a `Superserie:` header name."""
    content = SUPERSET_PREFIX_RE.sub("", name).strip()
    if SUPERSET_SEPARATOR in content:
        return [part.strip() for part in content.split(SUPERSET_SEPARATOR)]
    return [content]


def parse_exercise_line(line: str) -> ParsedExercise:
    """Parse one `Name | Sets | [Weights]` line.

    A name containing "Superserie:" marks a superset header: its constituent names
    are split on " y " and its notes are forced to the SUPERSET marker.

    Raises:
        MalformedLineError: Fewer than two fields, or an empty name.
    """
    parts = [part.strip() for part in line.split("|")]
    if len(parts) < 2:
        raise MalformedLineError(
            "Formato de línea inválido. Se esperaba: Ejercicio | Series | Peso"
        )

    name_raw, sets_raw = parts[0], parts[1]
    weights_raw = parts[2] if len(parts) > 2 else ""

    if not name_raw:
        raise MalformedLineError("Nombre del ejercicio vacío")

    is_superset = SUPERSET_TOKEN in name_raw.lower()
    if is_superset:
        superset_exercises = split_superset(name_raw)
        return ParsedExercise(
            name=f"Superserie: {' + '.join(superset_exercises)}",
            sets=SetsText.parse(sets_raw).format(),
            weights=WeightsText.parse(weights_raw).format(),
            notes=SUPERSET_NOTE,
            is_superset=True,
            superset_exercises=superset_exercises,
        )

    return ParsedExercise(
        name=name_raw,
        sets=SetsText.parse(sets_raw).format(),
        weights=WeightsText.parse(weights_raw).format(),
    )
