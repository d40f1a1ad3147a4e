"""
Tests for the trigger evaluation pipeline and state commits.
"""

import pytest
from PySide6.QtGui import QColor

from core.errors import TriggerConfigurationError
from core.threading import run_immediately
from core.triggers import ValidationState
from core.validation_engine import ValidationEngine, ValidationOutcome
from gui.main_window import is_blank, is_lannister


class TestPipeline:
    """Test ordering and first-match-wins resolution."""

    def test_no_triggers_resolves_to_valid(self, engine):
        future = engine.validate("")

        assert future.result(timeout=1) == ValidationState.VALID
        assert engine.current_state == ValidationState.VALID
        assert engine.current_message is None

    def test_neutral_trigger_takes_priority_over_error(self, engine):
        engine.add_error_trigger(lambda text: True, "always wrong")
        engine.add_neutral_trigger(lambda text: True)

        assert engine.validate("anything").result(timeout=1) == ValidationState.NEUTRAL
        assert engine.current_message is None

    def test_first_matching_error_trigger_wins(self, engine):
        engine.add_error_trigger(lambda text: False, "m1")
        engine.add_error_trigger(lambda text: text == "x", "m2")
        engine.add_error_trigger(lambda text: text == "x", "m3")

        assert engine.validate("x").result(timeout=1) == ValidationState.ERROR
        assert engine.current_message == "m2"

    def test_evaluation_stops_at_first_match(self, engine):
        calls = []

        def record(name, result):
            def predicate(text):
                calls.append(name)
                return result

            return predicate

        engine.add_neutral_trigger(record("n1", False))
        engine.add_neutral_trigger(record("n2", False))
        engine.add_error_trigger(record("e1", True), "e1")
        engine.add_error_trigger(record("e2", True), "e2")

        engine.validate("text").result(timeout=1)

        assert calls == ["n1", "n2", "e1"]

    def test_predicates_receive_the_text(self, engine, inline_executor):
        engine.add_neutral_trigger(is_blank)
        engine.add_error_trigger(is_lannister, "No Lannisters allowed!")

        engine.validate("Jon Snow").result(timeout=1)

        assert inline_executor.calls == [("Jon Snow",), ("Jon Snow",)]

    def test_neutral_trigger_message_is_kept(self, engine):
        engine.add_neutral_trigger(is_blank, "Enter a name")

        engine.validate("  ").result(timeout=1)

        assert engine.current_state == ValidationState.NEUTRAL
        assert engine.current_message == "Enter a name"

    def test_lannister_scenario(self, engine, recording_view):
        engine.add_neutral_trigger(is_blank)
        engine.add_error_trigger(is_lannister, "No Lannisters allowed!")

        assert engine.validate("").result(timeout=1) == ValidationState.NEUTRAL
        assert engine.current_message is None

        assert engine.validate("Cersei Lannister").result(timeout=1) == ValidationState.ERROR
        assert engine.current_message == "No Lannisters allowed!"
        assert recording_view.outcomes[-1].color == QColor("#d24d57")

        assert engine.validate("Tyrion Lannister").result(timeout=1) == ValidationState.VALID
        assert engine.current_message is None
        assert recording_view.outcomes[-1].color == QColor("#65c6bb")

    def test_any_state_reachable_from_any_other(self, engine):
        engine.add_neutral_trigger(is_blank)
        engine.add_error_trigger(lambda text: text == "bad", "bad")

        sequence = ["bad", "", "ok", "bad", "ok", ""]
        states = [engine.validate(text).result(timeout=1) for text in sequence]

        assert states == [
            ValidationState.ERROR,
            ValidationState.NEUTRAL,
            ValidationState.VALID,
            ValidationState.ERROR,
            ValidationState.VALID,
            ValidationState.NEUTRAL,
        ]


class TestAsyncEvaluation:
    """Test submission order and commit timing with a manual executor."""

    def _engine(self, executor, runner=run_immediately):
        engine = ValidationEngine(QColor("#000000"), executor=executor, run_on_owner_thread=runner)
        engine.error_color = QColor("#d24d57")
        return engine

    def test_validate_returns_before_predicates_run(self, manual_executor):
        engine = self._engine(manual_executor)
        engine.add_neutral_trigger(is_blank)

        future = engine.validate("")

        assert not future.done()
        assert engine.current_state == ValidationState.NEUTRAL
        manual_executor.run_all()
        assert future.result(timeout=1) == ValidationState.NEUTRAL

    def test_predicates_are_submitted_one_at_a_time(self, manual_executor):
        engine = self._engine(manual_executor)
        for _ in range(3):
            engine.add_error_trigger(lambda text: False, "never")

        future = engine.validate("x")

        for _ in range(3):
            assert len(manual_executor.pending) == 1
            manual_executor.run()
        assert manual_executor.pending == []
        assert future.result(timeout=1) == ValidationState.VALID

    def test_triggers_added_mid_pipeline_apply_to_next_call(self, manual_executor):
        engine = self._engine(manual_executor)
        engine.add_neutral_trigger(lambda text: False)

        first = engine.validate("x")
        engine.add_error_trigger(lambda text: True, "late")
        manual_executor.run_all()

        assert first.result(timeout=1) == ValidationState.VALID

        second = engine.validate("x")
        manual_executor.run_all()
        assert second.result(timeout=1) == ValidationState.ERROR

    def test_overlapping_calls_last_commit_wins(self, manual_executor):
        engine = self._engine(manual_executor)
        engine.add_neutral_trigger(is_blank)
        engine.add_error_trigger(is_lannister, "No Lannisters allowed!")

        slow = engine.validate("Cersei Lannister")
        fast = engine.validate("")

        # Finish the later call first
        manual_executor.run(1)
        assert fast.result(timeout=1) == ValidationState.NEUTRAL
        assert engine.current_state == ValidationState.NEUTRAL

        manual_executor.run_all()
        assert slow.result(timeout=1) == ValidationState.ERROR
        assert engine.current_state == ValidationState.ERROR

    def test_commit_waits_for_owner_thread(self, inline_executor):
        queued = []
        engine = self._engine(inline_executor, runner=queued.append)
        engine.add_error_trigger(lambda text: True, "wrong")

        future = engine.validate("x")

        assert not future.done()
        assert engine.current_state == ValidationState.NEUTRAL

        queued.pop()()

        assert future.result(timeout=1) == ValidationState.ERROR
        assert engine.current_message == "wrong"


class TestPredicateFailure:
    """Test that predicate exceptions propagate unchanged."""

    def test_exception_is_set_on_future(self, engine, recording_view):
        error = ValueError("lookup failed")

        def broken(text):
            raise error

        engine.add_neutral_trigger(broken)
        future = engine.validate("x")

        assert future.exception(timeout=1) is error
        with pytest.raises(ValueError, match="lookup failed"):
            future.result(timeout=1)

    def test_failure_commits_nothing(self, engine, recording_view):
        engine.add_error_trigger(lambda text: True, "wrong")
        engine.validate("x").result(timeout=1)

        def broken(text):
            raise RuntimeError("boom")

        engine.add_neutral_trigger(broken)
        engine.validate("y").exception(timeout=1)

        assert engine.current_state == ValidationState.ERROR
        assert engine.current_message == "wrong"
        assert len(recording_view.outcomes) == 1

    def test_later_predicates_do_not_run_after_failure(self, engine):
        calls = []

        def broken(text):
            raise KeyError(text)

        engine.add_neutral_trigger(broken)
        engine.add_error_trigger(lambda text: calls.append(text) or True, "never")

        engine.validate("x").exception(timeout=1)

        assert calls == []


class TestRegistration:
    """Test trigger registration checks."""

    def test_error_trigger_requires_message(self, engine):
        with pytest.raises(TriggerConfigurationError):
            engine.add_error_trigger(is_blank, None)

    def test_error_trigger_rejects_blank_message(self, engine):
        with pytest.raises(TriggerConfigurationError):
            engine.add_error_trigger(is_blank, "   ")

    def test_predicate_must_be_callable(self, engine):
        with pytest.raises(TriggerConfigurationError):
            engine.add_neutral_trigger("not callable")

    def test_registration_appends_in_order(self, engine):
        first = engine.add_error_trigger(is_blank, "blank")
        second = engine.add_error_trigger(is_lannister, "lannister")

        assert list(engine.error_triggers) == [first, second]
        assert len(engine.neutral_triggers) == 0


class TestCommitAndColors:
    """Test state-to-color mapping and view updates."""

    def test_colors_default_to_initial_color(self, inline_executor):
        engine = ValidationEngine(QColor("#123456"), executor=inline_executor)

        for state in ValidationState:
            assert engine.color_for(state) == QColor("#123456")
        assert engine.editing_color == QColor("#123456")

    def test_commit_renders_state_color(self, engine, recording_view):
        engine.add_error_trigger(lambda text: True, "wrong")
        engine.validate("x").result(timeout=1)

        outcome = recording_view.outcomes[-1]
        assert outcome == ValidationOutcome(ValidationState.ERROR, "wrong", QColor("#d24d57"))
        assert outcome.message_visible

    def test_valid_outcome_hides_message(self, engine, recording_view):
        engine.validate("x").result(timeout=1)

        assert not recording_view.outcomes[-1].message_visible

    def test_editing_began_paints_editing_color_only(self, engine, recording_view):
        engine.on_editing_began()

        assert recording_view.borders == [QColor("#95a5a6")]
        assert recording_view.outcomes == []
        assert engine.current_state == ValidationState.NEUTRAL

    def test_editing_ended_validates(self, engine):
        engine.add_error_trigger(is_lannister, "No Lannisters allowed!")

        assert engine.on_editing_ended("Jaime Lannister").result(timeout=1) == ValidationState.ERROR

    def test_reset_returns_to_neutral(self, engine, recording_view):
        engine.add_error_trigger(lambda text: True, "wrong")
        engine.validate("x").result(timeout=1)

        outcome = engine.reset()

        assert engine.current_state == ValidationState.NEUTRAL
        assert engine.current_message is None
        assert outcome.color == QColor("#6c757d")
        assert recording_view.outcomes[-1] is outcome

    def test_recoloring_current_state_repaints(self, engine, recording_view):
        engine.add_error_trigger(lambda text: True, "wrong")
        engine.validate("x").result(timeout=1)

        engine.error_color = QColor("#8b0000")

        assert recording_view.borders == [QColor("#8b0000")]
        assert engine.error_color == QColor("#8b0000")

    def test_recoloring_other_states_does_not_repaint(self, engine, recording_view):
        engine.add_error_trigger(lambda text: True, "wrong")
        engine.validate("x").result(timeout=1)

        engine.valid_color = QColor("#00ff00")
        engine.neutral_color = QColor("#0000ff")
        engine.editing_color = QColor("#ffff00")

        assert recording_view.borders == []

    def test_recoloring_while_editing_keeps_editing_color(self, engine, recording_view):
        engine.on_editing_began()

        engine.neutral_color = QColor("#0000ff")
        engine.editing_color = QColor("#ffff00")

        assert engine.editing
        assert recording_view.borders == [QColor("#95a5a6"), QColor("#ffff00")]

        engine.on_editing_ended("")
        assert not engine.editing

    def test_engine_without_view(self, inline_executor):
        engine = ValidationEngine(QColor("#000000"), executor=inline_executor)
        engine.on_editing_began()

        assert engine.validate("x").result(timeout=1) == ValidationState.VALID


class TestValidationOutcome:
    """Test derived message visibility."""

    @pytest.mark.parametrize("message, visible", [(None, False), ("", False), ("  \t", False), ("Oops", True)])
    def test_message_visible(self, message, visible):
        outcome = ValidationOutcome(ValidationState.ERROR, message, QColor("#000000"))

        assert outcome.message_visible is visible
