"""
Validation text field: a bordered line edit plus a status message label.

This module wires a BorderedLineEdit to a ValidationEngine. Focus-in shows
the editing color, focus-out validates the text, and every commit recolors
the border and the message label with the color of the new state.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future

from PySide6.QtCore import QObject, Qt, Signal
from PySide6.QtGui import QColor, QFont, QFontMetrics
from PySide6.QtWidgets import QLabel

from core.config import MESSAGE_SPACING, FieldStyle
from core.error_handler import get_error_handler
from core.threading import OwnerThreadDispatcher
from core.triggers import Predicate, Trigger, ValidationState
from core.validation_engine import ValidationEngine, ValidationOutcome
from gui.utils.styling import ColorLike, message_font, set_label_text_color, to_qcolor

from .bordered_line_edit import BorderedLineEdit

logger = logging.getLogger(__name__)


class ValidationTextField(QObject):
    """
    Validates a BorderedLineEdit with ordered neutral and error triggers.

    All state colors and the editing color start as the field's current
    border color. The message label is created in the field's parent widget
    and placed under the field by ``reframe``, which must be called again
    whenever layout moves or resizes the field.

    Signals:
        validated(object, object): New ValidationState and message (or None)
    """

    validated = Signal(object, object)

    def __init__(self, field: BorderedLineEdit, *, executor: Executor | None = None) -> None:
        """
        Initialize the validation field.

        Args:
            field: The bordered line edit to validate; must have a parent widget
            executor: Runs trigger predicates; defaults to the shared thread pool

        Raises:
            ValueError: If the field has no parent widget to host the message
        """
        parent = field.parentWidget()
        if parent is None:
            raise ValueError("ValidationTextField requires a field with a parent widget")

        super().__init__(field)
        self._field = field
        self._dispatcher = OwnerThreadDispatcher(self)
        self._engine = ValidationEngine(
            field.border_color,
            view=self,
            executor=executor,
            run_on_owner_thread=self._dispatcher,
        )
        self._error_handler = get_error_handler()

        self._message_label = QLabel(parent)
        self._message_label.setObjectName("validationMessage")
        self._message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._message_label.hide()
        self.message_font = field.font()

        field.editingBegan.connect(self._on_editing_began)
        field.editingEnded.connect(self._on_editing_ended)

    # Accessors

    @property
    def field(self) -> BorderedLineEdit:
        return self._field

    @property
    def message_label(self) -> QLabel:
        return self._message_label

    @property
    def engine(self) -> ValidationEngine:
        return self._engine

    @property
    def state(self) -> ValidationState:
        return self._engine.current_state

    @property
    def message(self) -> str | None:
        return self._engine.current_message

    # Configuration

    @property
    def neutral_color(self) -> QColor:
        return self._engine.neutral_color

    @neutral_color.setter
    def neutral_color(self, color: ColorLike) -> None:
        self._set_state_color(ValidationState.NEUTRAL, color)

    @property
    def valid_color(self) -> QColor:
        return self._engine.valid_color

    @valid_color.setter
    def valid_color(self, color: ColorLike) -> None:
        self._set_state_color(ValidationState.VALID, color)

    @property
    def error_color(self) -> QColor:
        return self._engine.error_color

    @error_color.setter
    def error_color(self, color: ColorLike) -> None:
        self._set_state_color(ValidationState.ERROR, color)

    @property
    def editing_color(self) -> QColor:
        return self._engine.editing_color

    @editing_color.setter
    def editing_color(self, color: ColorLike) -> None:
        self._engine.editing_color = to_qcolor(color)

    def _set_state_color(self, state: ValidationState, color: ColorLike) -> None:
        qcolor = to_qcolor(color)
        if state == ValidationState.NEUTRAL:
            self._engine.neutral_color = qcolor
        elif state == ValidationState.VALID:
            self._engine.valid_color = qcolor
        else:
            self._engine.error_color = qcolor

        # The engine repaints the border; the message keeps the same accent
        if state == self.state:
            set_label_text_color(self._message_label, qcolor)

    @property
    def message_font(self) -> QFont:
        return self._message_label.font()

    @message_font.setter
    def message_font(self, font: QFont) -> None:
        """Set the message font and resize the label to its line height."""
        self._message_label.setFont(font)
        self.reframe()

    def apply_style(self, style: FieldStyle) -> None:
        """
        Apply a resolved style preset to the field and the message label.

        The border is redrawn with the color of the current state.
        """
        self._field.border_edges = style.edges
        self._field.border_width = style.width
        self.neutral_color = style.neutral_color
        self.valid_color = style.valid_color
        self.error_color = style.error_color
        self.editing_color = style.editing_color
        self.message_font = message_font(style.message_font_size, self._field.font())

        self._field.border_color = self._engine.color_for(self.state)
        self._field.redraw_border()

    # Triggers

    def add_neutral_trigger(self, predicate: Predicate, message: str | None = None) -> Trigger:
        return self._engine.add_neutral_trigger(predicate, message)

    def add_error_trigger(self, predicate: Predicate, message: str) -> Trigger:
        return self._engine.add_error_trigger(predicate, message)

    # Validation

    def validate(self) -> Future[ValidationState]:
        """
        Validate the field's current text.

        Returns:
            Future resolving with the new state once the commit has been
            applied on the GUI thread
        """
        return self._engine.validate(self._field.text())

    def reset(self) -> None:
        """Return to the neutral state and hide the message."""
        self._engine.reset()

    def reframe(self) -> None:
        """Place the message label directly under the field, one line high."""
        geometry = self._field.geometry()
        line_height = QFontMetrics(self._message_label.font()).lineSpacing()
        self._message_label.setGeometry(
            geometry.x(),
            geometry.y() + geometry.height() + MESSAGE_SPACING,
            geometry.width(),
            line_height,
        )

    # ValidationView

    def paint_border(self, color: QColor) -> None:
        self._field.border_color = color
        self._field.redraw_border()

    def render(self, outcome: ValidationOutcome) -> None:
        self._message_label.setText(outcome.message or "")
        self._message_label.setVisible(outcome.message_visible)
        set_label_text_color(self._message_label, outcome.color)
        self.paint_border(outcome.color)
        self.validated.emit(outcome.state, outcome.message)

    # Field events

    def _on_editing_began(self) -> None:
        self._engine.on_editing_began()

    def _on_editing_ended(self) -> None:
        # Read widget state here; the failure callback may run on a worker thread
        text = self._field.text()
        name = self._field.objectName()
        pending = self._engine.on_editing_ended(text)
        pending.add_done_callback(lambda done: self._report_failure(done, name, text))

    def _report_failure(self, done: Future[ValidationState], name: str, text: str) -> None:
        error = done.exception()
        if error is None:
            return

        logger.warning(f"Validation of {name or 'field'} failed: {error}")
        context = {"predicate": "trigger", "field": name, "text": text}
        self._dispatcher(lambda: self._error_handler.handle(error, context))
