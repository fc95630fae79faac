"""Exceptions raised while parsing workout import text.

Both are ValueErrors so callers that only care about "bad input" can catch that.
"""


class UnrecognizedMonthError(ValueError):
    """A date header names a month that is not a known Spanish month form."""

    def __init__(self, month_name: str, normalized: str):
        self.month_name = month_name
        self.normalized = normalized
        super().__init__(
            f"Mes no reconocido: {month_name} (normalizado: {normalized})"
        )


class MalformedLineError(ValueError):
    """An exercise line is missing its sets field or its name."""
