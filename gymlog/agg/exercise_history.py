from gymlog.models.workout import ExerciseHistoryItem, ExerciseLogEntry
from gymlog.parsing.exercise_line import SetsText, WeightsText


def exercise_history(entries: list[ExerciseLogEntry]) -> list[ExerciseHistoryItem]:
    """
    Summarize how each exercise has been done, grouped by exact name.

    Args:
        entries: Logged exercises, most recent first.

    Returns:
        One item per exercise name, most frequent first, ties broken by the most
        recently used.
    """
    grouped: dict[str, list[ExerciseLogEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.name, []).append(entry)

    results = [_summarize(name, uses) for name, uses in grouped.items()]
    results.sort(key=lambda item: (-item.frequency, -item.last_used.toordinal()))
    return results


def _summarize(name: str, uses: list[ExerciseLogEntry]) -> ExerciseHistoryItem:
    set_counts = [
        count for use in uses if (count := SetsText(use.sets).set_count) is not None
    ]
    weights = [WeightsText(use.weights) for use in uses]
    # Bodyweight and empty entries say nothing about the load used
    loaded = [w for w in weights if w.text and not w.is_bodyweight]
    kg_values = [kg for w in loaded for kg in w.per_set_kg]

    return ExerciseHistoryItem(
        name=name,
        frequency=len(uses),
        last_used=max(use.date for use in uses),
        avg_sets=round(sum(set_counts) / len(set_counts)) if set_counts else None,
        latest_weights=loaded[0].text if loaded else "",
        max_weight_kg=max(kg_values) if kg_values else None,
    )
