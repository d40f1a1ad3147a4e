"""
Trigger-driven validation engine for a single text field.

The engine owns the ordered neutral and error trigger lists and the current
validation state. Each ``validate`` call evaluates predicates one at a time on
a worker executor, picks the first match (neutral triggers before error
triggers, falling back to Valid), and commits the result on the owner thread
through the injected runner.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Protocol

from PySide6.QtGui import QColor

from .errors import TriggerConfigurationError
from .threading import OwnerThreadDispatcher, OwnerThreadRunner, get_predicate_executor
from .triggers import VALID_TRIGGER, Predicate, Trigger, TriggerList, ValidationState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationOutcome:
    """One committed validation result and the accent color it maps to."""

    state: ValidationState
    message: str | None
    color: QColor

    @property
    def message_visible(self) -> bool:
        return self.message is not None and bool(self.message.strip())


class ValidationView(Protocol):
    """Visual side of a validated field. Called on the owner thread only."""

    def paint_border(self, color: QColor) -> None: ...
    def render(self, outcome: ValidationOutcome) -> None: ...


class ValidationEngine:
    """
    Evaluates triggers against field text and tracks the resulting state.

    Predicates run off the owner thread but never concurrently with each
    other: the next predicate is submitted only after the previous one
    returned false. Overlapping ``validate`` calls are not serialized; each
    commits when it finishes.
    """

    def __init__(
        self,
        initial_color: QColor,
        view: ValidationView | None = None,
        *,
        executor: Executor | None = None,
        run_on_owner_thread: OwnerThreadRunner | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            initial_color: Starting color for every state and for editing
            view: Receives border repaints and commits
            executor: Runs predicates; defaults to the shared QThreadPool executor
            run_on_owner_thread: Marshals commits onto the owner thread; defaults
                to an OwnerThreadDispatcher living on the constructing thread
        """
        self._view = view
        self._executor = executor or get_predicate_executor()
        if run_on_owner_thread is None:
            run_on_owner_thread = OwnerThreadDispatcher()
        self._run_on_owner_thread = run_on_owner_thread

        self._editing = False
        self._state = ValidationState.NEUTRAL
        self._message: str | None = None
        self._neutral_triggers = TriggerList(ValidationState.NEUTRAL)
        self._error_triggers = TriggerList(ValidationState.ERROR)

        color = QColor(initial_color)
        self._colors: dict[ValidationState, QColor] = {state: QColor(color) for state in ValidationState}
        self._editing_color = QColor(color)

    # State

    @property
    def current_state(self) -> ValidationState:
        return self._state

    @property
    def current_message(self) -> str | None:
        return self._message

    @property
    def neutral_triggers(self) -> TriggerList:
        return self._neutral_triggers

    @property
    def error_triggers(self) -> TriggerList:
        return self._error_triggers

    # Colors

    @property
    def neutral_color(self) -> QColor:
        return self._colors[ValidationState.NEUTRAL]

    @neutral_color.setter
    def neutral_color(self, color: QColor) -> None:
        self._set_state_color(ValidationState.NEUTRAL, color)

    @property
    def valid_color(self) -> QColor:
        return self._colors[ValidationState.VALID]

    @valid_color.setter
    def valid_color(self, color: QColor) -> None:
        self._set_state_color(ValidationState.VALID, color)

    @property
    def error_color(self) -> QColor:
        return self._colors[ValidationState.ERROR]

    @error_color.setter
    def error_color(self, color: QColor) -> None:
        self._set_state_color(ValidationState.ERROR, color)

    @property
    def editing_color(self) -> QColor:
        return self._editing_color

    @editing_color.setter
    def editing_color(self, color: QColor) -> None:
        self._editing_color = QColor(color)
        if self._editing and self._view is not None:
            self._view.paint_border(self._editing_color)

    def color_for(self, state: ValidationState) -> QColor:
        """Border color mapped from ``state``."""
        return self._colors[state]

    def _set_state_color(self, state: ValidationState, color: QColor) -> None:
        self._colors[state] = QColor(color)
        # The border shows the current state's color unless the user is editing
        if state == self._state and not self._editing and self._view is not None:
            self._view.paint_border(self._colors[state])

    # Trigger registration

    def add_neutral_trigger(self, predicate: Predicate, message: str | None = None) -> Trigger:
        """
        Append a trigger that puts the field in the neutral state.

        Args:
            predicate: Called with the field text; true means the trigger matches
            message: Optional message to show while neutral
        """
        if not callable(predicate):
            raise TriggerConfigurationError("Trigger predicate must be callable", f"got {predicate!r}")
        return self._neutral_triggers.add(predicate, message)

    def add_error_trigger(self, predicate: Predicate, message: str) -> Trigger:
        """
        Append a trigger that puts the field in the error state.

        Args:
            predicate: Called with the field text; true means the trigger matches
            message: Message shown while the trigger is active

        Raises:
            TriggerConfigurationError: If the predicate is not callable or the
                message is missing or blank
        """
        if not callable(predicate):
            raise TriggerConfigurationError("Trigger predicate must be callable", f"got {predicate!r}")
        if message is None or not message.strip():
            raise TriggerConfigurationError("Error triggers require a message", f"got {message!r}")
        return self._error_triggers.add(predicate, message)

    # Validation

    def validate(self, text: str) -> Future[ValidationState]:
        """
        Validate ``text`` and commit the result.

        Returns immediately. The returned future resolves with the new state
        after the commit has run on the owner thread, or with the exception a
        predicate raised; a failed predicate commits nothing.
        """
        result: Future[ValidationState] = Future()
        pipeline = self._neutral_triggers.snapshot() + self._error_triggers.snapshot()
        logger.debug(f"Validating with {len(pipeline)} trigger(s)")
        self._evaluate(pipeline, 0, text, result)
        return result

    def on_editing_began(self) -> None:
        """Show the editing color without running the triggers."""
        self._editing = True
        if self._view is not None:
            self._view.paint_border(self._editing_color)

    def on_editing_ended(self, text: str) -> Future[ValidationState]:
        self._editing = False
        return self.validate(text)

    @property
    def editing(self) -> bool:
        return self._editing

    def reset(self) -> ValidationOutcome:
        """Return to the neutral state with no message. Owner thread only."""
        return self._commit(ValidationState.NEUTRAL, None)

    def _evaluate(
        self,
        pipeline: Sequence[Trigger],
        index: int,
        text: str,
        result: Future[ValidationState],
    ) -> None:
        if index == len(pipeline):
            self._resolve(VALID_TRIGGER, result)
            return

        trigger = pipeline[index]
        try:
            pending = self._executor.submit(trigger.predicate, text)
        except RuntimeError as exc:
            result.set_exception(exc)
            return

        pending.add_done_callback(lambda done: self._on_predicate_done(done, pipeline, index, text, result))

    def _on_predicate_done(
        self,
        done: Future[bool],
        pipeline: Sequence[Trigger],
        index: int,
        text: str,
        result: Future[ValidationState],
    ) -> None:
        error = done.exception()
        if error is not None:
            logger.debug(f"Trigger {index} raised {type(error).__name__}, aborting validation")
            result.set_exception(error)
            return

        if done.result():
            self._resolve(pipeline[index], result)
        else:
            self._evaluate(pipeline, index + 1, text, result)

    def _resolve(self, trigger: Trigger, result: Future[ValidationState]) -> None:
        def commit() -> None:
            try:
                self._commit(trigger.state, trigger.message)
            except Exception as exc:
                result.set_exception(exc)
            else:
                result.set_result(trigger.state)

        self._run_on_owner_thread(commit)

    def _commit(self, state: ValidationState, message: str | None) -> ValidationOutcome:
        self._state = state
        self._message = message
        outcome = ValidationOutcome(state, message, QColor(self.color_for(state)))
        logger.debug(f"Committed {state.value} state (message={message!r})")

        if self._view is not None:
            self._view.render(outcome)
        return outcome
