import logging
import unicodedata
from datetime import date

from .errors import UnrecognizedMonthError

logger = logging.getLogger(__name__)

# Full and 3-letter Spanish month names, already lower-cased and accent-free.
SPANISH_MONTHS: dict[str, int] = {
    "ene": 1,
    "enero": 1,
    "feb": 2,
    "febrero": 2,
    "mar": 3,
    "marzo": 3,
    "abr": 4,
    "abril": 4,
    "may": 5,
    "mayo": 5,
    "jun": 6,
    "junio": 6,
    "jul": 7,
    "julio": 7,
    "ago": 8,
    "agosto": 8,
    "sep": 9,
    "septiembre": 9,
    "oct": 10,
    "octubre": 10,
    "nov": 11,
    "noviembre": 11,
    "dic": 12,
    "diciembre": 12,
}


def strip_accents(text: str) -> str:
    """Lower-case `text` and drop diacritics ("Sábado" -> "sabado")."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def month_number(month_name: str) -> int:
    """Map a Spanish month name or abbreviation to 1-12.

    Raises:
        UnrecognizedMonthError: If the name matches none of the known forms.
    """
    normalized = strip_accents(month_name.strip())
    month = SPANISH_MONTHS.get(normalized)
    if month is None:
        raise UnrecognizedMonthError(month_name, normalized)
    return month


def to_iso_date(day: str, month_name: str, year: str) -> str:
    """Build a `YYYY-MM-DD` string from the tokens of a date header."""
    month = month_number(month_name)
    iso = f"{year}-{month:02d}-{day.zfill(2)}"
    logger.debug(f"Parsed date tokens day={day}, month={month_name} -> {iso}")
    return iso


def normalize_spanish_date(day: str, month_name: str, year: str) -> date:
    """Parse the tokens of a date header into a date.

    Args:
        day: One or two digits.
        month_name: Spanish month name, full or abbreviated, any case, accents allowed.
        year: Four digits.

    Raises:
        UnrecognizedMonthError: For an unknown month name.
        ValueError: For a day that does not exist in that month.
    """
    return date.fromisoformat(to_iso_date(day, month_name, year))
