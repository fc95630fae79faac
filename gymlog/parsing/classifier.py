"""Keyword-based session type and muscle tag inference for a parsed workout."""

from dataclasses import dataclass, field

from gymlog.models.workout import ParsedExercise, SessionType

PUSH_KEYWORDS = [
    "press",
    "flexiones",
    "triceps",
    "pecho",
    "militar",
    "pájaros",
    "contractora",
    "cruces",
    "pull over",
]
PULL_KEYWORDS = [
    "remo",
    "dominadas",
    "jalón",
    "curl",
    "concentrado",
    "martillo",
    "invertido",
    "low row",
]
LEG_KEYWORDS = [
    "extensión",
    "prensa",
    "jaca",
    "peso muerto",
    "gemelos",
    "cuádriceps",
    "sentadilla",
    "zancadas",
]


@dataclass
class SessionClassification:
    session_type: SessionType
    muscle_tags: list[str] = field(default_factory=list)


def _names_to_check(exercise: ParsedExercise) -> list[str]:
    """Every constituent of a superset, or the exercise's own name."""
    if exercise.is_superset and exercise.superset_exercises:
        return [name.lower() for name in exercise.superset_exercises]
    return [exercise.name.lower()]


def _matches(name: str, keywords: list[str]) -> bool:
    return any(keyword in name for keyword in keywords)


def classify_session(exercises: list[ParsedExercise]) -> SessionClassification:
    """Infer the session type and muscle tags of a workout from its exercise names.

    Each name tested counts once per category it matches, so a superset can vote
    for several categories. LEG needs a strict majority over both others, PULL a
    strict majority over PUSH; everything else (ties, no matches) is PUSH.
    """
    push_count = 0
    pull_count = 0
    leg_count = 0
    # dict keys keep first-seen order and drop duplicates
    tags: dict[str, None] = {}

    for exercise in exercises:
        for name in _names_to_check(exercise):
            if _matches(name, PUSH_KEYWORDS):
                push_count += 1
                tags["Pecho"] = None
                if "triceps" in name:
                    tags["Tríceps"] = None
                if "militar" in name or "pájaros" in name:
                    tags["Hombros"] = None

            if _matches(name, PULL_KEYWORDS):
                pull_count += 1
                tags["Espalda"] = None
                if "curl" in name or "concentrado" in name or "martillo" in name:
                    tags["Bíceps"] = None

            if _matches(name, LEG_KEYWORDS):
                leg_count += 1
                if "cuádriceps" in name or "extensión" in name:
                    tags["Cuádriceps"] = None
                if "peso muerto" in name:
                    tags["Femoral"] = None
                if "gemelos" in name:
                    tags["Gemelos"] = None
                if "prensa" in name or "sentadilla" in name:
                    tags["Cuádriceps"] = None
                    tags["Glúteos"] = None

    session_type: SessionType
    if leg_count > push_count and leg_count > pull_count:
        session_type = "LEG"
    elif pull_count > push_count:
        session_type = "PULL"
    else:
        session_type = "PUSH"

    return SessionClassification(session_type=session_type, muscle_tags=list(tags))
