"""Plain-text import/export of body measurements.

Accepted line shapes:

    4/3/25 - 72.3kg
    4/3/25 - 72.3kg - 175cm
    🗓️4/3/25 🏋️Any text ↔️ 72.3kg 📏175cm
"""

import re
from datetime import date
from typing import Iterable

from gymlog.models.progress import ProgressEntry, ProgressInput

_DATE_RE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{2,4})")
_WEIGHT_RE = re.compile(r"(\d+(?:\.\d+)?)kg")
_HEIGHT_RE = re.compile(r"(\d+(?:\.\d+)?)cm")


def parse_progress_line(line: str) -> ProgressInput:
    """Parse one measurement line. Date and weight are required, height is optional.

    Raises:
        ValueError: If the date or weight is missing or invalid.
    """
    date_match = _DATE_RE.search(line)
    weight_match = _WEIGHT_RE.search(line)
    if not date_match or not weight_match:
        raise ValueError(f"Formato inválido: {line}")

    day, month, year = date_match.groups()
    full_year = f"20{year}" if len(year) == 2 else year
    try:
        entry_date = date(int(full_year), int(month), int(day))
    except ValueError:
        raise ValueError(f"Fecha inválida: {date_match.group(0)}")

    weight = float(weight_match.group(1))
    if weight <= 0:
        raise ValueError(f"Peso inválido: {weight_match.group(1)}")

    height = None
    height_match = _HEIGHT_RE.search(line)
    if height_match and float(height_match.group(1)) > 0:
        height = float(height_match.group(1))

    return ProgressInput(date=entry_date, weight=weight, height=height)


def _number(value: float) -> str:
    return f"{value:g}"


def format_progress_line(entry: ProgressEntry) -> str:
    """Render an entry as `dd/mm/yy - <w>kg[ - <h>cm]`."""
    parts = [entry.date.strftime("%d/%m/%y")]
    if entry.weight is not None:
        parts.append(f"{_number(entry.weight)}kg")
    if entry.height:
        parts.append(f"{_number(entry.height)}cm")
    return " - ".join(parts)


def format_progress_text(entries: Iterable[ProgressEntry]) -> str:
    """Render entries oldest first, one per line."""
    ordered = sorted(entries, key=lambda e: e.date)
    return "\n".join(format_progress_line(e) for e in ordered)
