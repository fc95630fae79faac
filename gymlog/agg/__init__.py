from .exercise_history import exercise_history

__all__ = [
    "exercise_history",
]
