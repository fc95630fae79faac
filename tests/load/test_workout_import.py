"""Tests for importing parsed workouts with duplicate resolution."""

from datetime import date

import pytest

from gymlog.load.workout_import import (
    DuplicatesOutcome,
    ImportProgress,
    ImportSummary,
    ParseErrorsOutcome,
    WorkoutImportError,
    find_duplicates,
    import_parse_result,
    import_workouts,
)
from gymlog.models.workout import SUPERSET_NOTE
from gymlog.parsing.workout_text import parse_workout_text
from tests._factories import FakeWorkoutStore, StorageFailure, TEST_USER_ID

MONDAY = date(2025, 3, 3)
WEDNESDAY = date(2025, 3, 5)
FRIDAY = date(2025, 3, 7)

TEXT = """🗓️Lunes, 3 marzo 2025
Press Banca | 4x8 | 60kg
Press Militar | 3x10 | 30kg

🗓️Miércoles, 5 marzo 2025
Remo | 4x10 | 50kg
Superserie: Curl y Martillo | 4x10 y 4x12 | 20kg y 15kg
"""

THREE_DAYS = TEXT + """
🗓️Viernes, 7 marzo 2025
Sentadilla | 5x5 | 100kg
"""


class TestParseErrorGate:
    def test_errors_block_the_import(self, fake_store: FakeWorkoutStore):
        text = TEXT + " | 4x8 | 20kg\n"

        outcome = import_workouts(fake_store, TEST_USER_ID, text, "overwrite")

        assert isinstance(outcome, ParseErrorsOutcome)
        assert len(outcome.errors) == 1
        assert outcome.message == "Se encontraron 1 errores durante la importación"

    def test_free_text_lines_do_not_block_the_import(self, fake_store: FakeWorkoutStore):
        text = TEXT.replace(
            "Press Banca | 4x8 | 60kg\n",
            "Press Banca | 4x8 | 60kg\nCalentamiento 10 min\n",
        )

        outcome = import_workouts(fake_store, TEST_USER_ID, text)

        assert isinstance(outcome, ImportSummary)
        assert len(outcome.exercises) == 4

    def test_no_store_calls_when_text_has_errors(self, fake_store: FakeWorkoutStore):
        import_workouts(fake_store, TEST_USER_ID, "🗓️Lunes, 3 xx 2025\n", "ask")
        assert fake_store.calls == []


class TestNewWorkouts:
    def test_inserts_workouts_and_exercises(self, fake_store: FakeWorkoutStore):
        outcome = import_workouts(fake_store, TEST_USER_ID, TEXT)

        assert isinstance(outcome, ImportSummary)
        assert [w.date for w in outcome.workouts] == [MONDAY, WEDNESDAY]
        assert len(outcome.exercises) == 4
        assert outcome.skipped == []
        assert outcome.message == "Se importaron 2 entrenamientos con 4 ejercicios"

    def test_positions_start_at_one(self, fake_store: FakeWorkoutStore):
        outcome = import_workouts(fake_store, TEST_USER_ID, TEXT)

        monday = outcome.workouts[0]
        assert [e.position for e in fake_store.exercises_of(monday.id)] == [1, 2]

    def test_stores_classification(self, fake_store: FakeWorkoutStore):
        import_workouts(fake_store, TEST_USER_ID, TEXT)

        wednesday = fake_store.workout_on(TEST_USER_ID, WEDNESDAY)
        assert wednesday is not None
        assert wednesday.session_type == "PULL"
        assert wednesday.muscle_tags == ["Espalda", "Bíceps"]

    def test_superset_is_linked_and_marked(self, fake_store: FakeWorkoutStore):
        outcome = import_workouts(fake_store, TEST_USER_ID, TEXT)

        remo, superset = fake_store.exercises_of(outcome.workouts[1].id)
        assert remo.notes is None
        assert remo.is_linked_to_previous is False
        assert superset.name == "Superserie: Curl + Martillo"
        assert superset.notes == SUPERSET_NOTE
        assert superset.is_linked_to_previous is True

    def test_nothing_to_import(self, fake_store: FakeWorkoutStore):
        outcome = import_workouts(fake_store, TEST_USER_ID, "Marzo\n\n")

        assert isinstance(outcome, ImportSummary)
        assert outcome.workouts == []
        assert fake_store.calls == []


class TestDuplicates:
    def test_find_duplicates(self, fake_store: FakeWorkoutStore):
        existing = fake_store.add_existing(TEST_USER_ID, MONDAY)
        parsed = parse_workout_text(TEXT)

        conflicts = find_duplicates(fake_store, TEST_USER_ID, parsed.workouts)

        assert len(conflicts) == 1
        assert conflicts[0].date == MONDAY
        assert conflicts[0].existing == existing
        assert conflicts[0].new == parsed.workouts[0]

    def test_ask_returns_duplicates_without_writing(self, fake_store: FakeWorkoutStore):
        fake_store.add_existing(TEST_USER_ID, MONDAY)

        outcome = import_workouts(fake_store, TEST_USER_ID, TEXT, "ask")

        assert isinstance(outcome, DuplicatesOutcome)
        assert [d.date for d in outcome.duplicates] == [MONDAY]
        assert outcome.message == "Se encontraron 1 entrenamientos duplicados"
        assert set(fake_store.calls) == {"find_workout"}

    def test_other_users_workouts_are_not_duplicates(self, fake_store: FakeWorkoutStore):
        from uuid import uuid4

        fake_store.add_existing(uuid4(), MONDAY)

        outcome = import_workouts(fake_store, TEST_USER_ID, TEXT, "ask")

        assert isinstance(outcome, ImportSummary)
        assert len(outcome.workouts) == 2

    def test_skip(self, fake_store: FakeWorkoutStore):
        existing = fake_store.add_existing(TEST_USER_ID, MONDAY, ["Viejo"])

        outcome = import_workouts(fake_store, TEST_USER_ID, TEXT, "skip")

        assert isinstance(outcome, ImportSummary)
        assert [w.date for w in outcome.workouts] == [WEDNESDAY]
        assert outcome.skipped == [MONDAY]
        assert outcome.message == (
            "Se importaron 1 entrenamientos con 2 ejercicios. "
            "Se omitieron 1 entrenamientos duplicados"
        )
        assert [e.name for e in fake_store.exercises_of(existing.id)] == ["Viejo"]

    def test_skip_makes_reimport_a_no_op(self, fake_store: FakeWorkoutStore):
        import_workouts(fake_store, TEST_USER_ID, TEXT)
        workouts_before = dict(fake_store.workouts)
        exercises_before = dict(fake_store.exercises)

        outcome = import_workouts(fake_store, TEST_USER_ID, TEXT, "skip")

        assert outcome.workouts == []
        assert outcome.skipped == [MONDAY, WEDNESDAY]
        assert fake_store.workouts == workouts_before
        assert fake_store.exercises == exercises_before

    def test_overwrite_replaces_the_workout(self, fake_store: FakeWorkoutStore):
        existing = fake_store.add_existing(TEST_USER_ID, MONDAY, ["Viejo 1", "Viejo 2"])

        outcome = import_workouts(fake_store, TEST_USER_ID, TEXT, "overwrite")

        assert isinstance(outcome, ImportSummary)
        assert existing.id not in fake_store.workouts
        assert fake_store.exercises_of(existing.id) == []
        monday = fake_store.workout_on(TEST_USER_ID, MONDAY)
        assert monday is not None
        assert [e.name for e in fake_store.exercises_of(monday.id)] == [
            "Press Banca",
            "Press Militar",
        ]
        assert len(outcome.workouts) == 2
        assert "delete_workout" in fake_store.calls

    def test_merge_appends_exercises(self, fake_store: FakeWorkoutStore):
        existing = fake_store.add_existing(TEST_USER_ID, MONDAY, ["Viejo 1", "Viejo 2"])

        outcome = import_workouts(fake_store, TEST_USER_ID, TEXT, "merge")

        assert isinstance(outcome, ImportSummary)
        assert outcome.workouts[0] == existing
        assert [e.name for e in fake_store.exercises_of(existing.id)] == [
            "Viejo 1",
            "Viejo 2",
            "Press Banca",
            "Press Militar",
        ]
        assert "delete_workout" not in fake_store.calls

    def test_merge_looks_up_max_position_before_each_insert(
        self, fake_store: FakeWorkoutStore
    ):
        """The first merged exercise lands at max+1; the next adds its index on top of the new max."""
        existing = fake_store.add_existing(TEST_USER_ID, MONDAY, ["Viejo 1", "Viejo 2"])

        import_workouts(fake_store, TEST_USER_ID, TEXT, "merge")

        positions = [e.position for e in fake_store.exercises_of(existing.id)]
        assert positions == [1, 2, 3, 5]
        assert fake_store.calls.count("max_exercise_position") == 2

    def test_merge_grows_exercise_count(self, fake_store: FakeWorkoutStore):
        existing = fake_store.add_existing(TEST_USER_ID, MONDAY, ["Viejo"])

        import_workouts(fake_store, TEST_USER_ID, TEXT, "merge")

        assert len(fake_store.exercises_of(existing.id)) == 1 + 2


class TestStorageFailures:
    def test_earlier_workouts_stay_committed(self, fake_store: FakeWorkoutStore):
        fake_store.fail_on_workout_date = WEDNESDAY

        with pytest.raises(WorkoutImportError) as exc_info:
            import_workouts(fake_store, TEST_USER_ID, THREE_DAYS)

        error = exc_info.value
        assert str(error) == "Error al guardar el entrenamiento del 2025-03-05: connection lost"
        assert error.workout_date == WEDNESDAY
        assert isinstance(error.cause, StorageFailure)
        assert isinstance(error.__cause__, StorageFailure)
        assert [w.date for w in error.committed.workouts] == [MONDAY]
        assert len(error.committed.exercises) == 2
        # Monday is kept, Friday is never attempted
        assert fake_store.workout_on(TEST_USER_ID, MONDAY) is not None
        assert fake_store.workout_on(TEST_USER_ID, FRIDAY) is None

    def test_failure_inside_a_workout_keeps_its_earlier_rows(
        self, fake_store: FakeWorkoutStore
    ):
        fake_store.fail_on_exercise_name = "Press Militar"

        with pytest.raises(WorkoutImportError) as exc_info:
            import_workouts(fake_store, TEST_USER_ID, TEXT)

        assert exc_info.value.committed == ImportProgress()
        monday = fake_store.workout_on(TEST_USER_ID, MONDAY)
        assert monday is not None
        assert [e.name for e in fake_store.exercises_of(monday.id)] == ["Press Banca"]

    def test_repeated_date_in_one_text_fails_on_second_insert(
        self, fake_store: FakeWorkoutStore
    ):
        text = TEXT + "🗓️Lunes, 3 marzo 2025\nFondos | 3x12\n"

        with pytest.raises(WorkoutImportError) as exc_info:
            import_workouts(fake_store, TEST_USER_ID, text, "ask")

        assert exc_info.value.workout_date == MONDAY
        assert len(exc_info.value.committed.workouts) == 2


class TestImportParseResult:
    def test_accepts_a_parse_result(self, fake_store: FakeWorkoutStore):
        outcome = import_parse_result(fake_store, TEST_USER_ID, parse_workout_text(TEXT))
        assert isinstance(outcome, ImportSummary)
        assert len(outcome.workouts) == 2


class TestImportProgress:
    def test_is_immutable_accumulator(self, workout_ref_factory, exercise_ref_factory):
        start = ImportProgress()
        workout = workout_ref_factory.make()
        exercise = exercise_ref_factory.make({"workout_id": workout.id})

        saved = start.with_saved(workout, (exercise,))
        skipped = saved.with_skipped(MONDAY)

        assert start == ImportProgress()
        assert saved.workouts == (workout,)
        assert skipped.skipped == (MONDAY,)
        assert skipped.to_summary().exercises == [exercise]
