"""
Demo window for the validation field widgets.

This module contains the MainWindow class, which shows a single name field
that rejects Lannisters (except Tyrion).
"""

import logging

from PySide6.QtGui import QResizeEvent, QShowEvent
from PySide6.QtWidgets import QLabel, QMainWindow, QVBoxLayout, QWidget

from core.geometry import Edge
from gui.utils.focus import ClearFocusOnClick
from gui.utils.styling import AccessiblePalette, message_font
from gui.widgets import BorderedLineEdit, ValidationTextField

logger = logging.getLogger(__name__)


def is_blank(text: str) -> bool:
    """The field is empty or whitespace only."""
    return not text.strip()


def is_lannister(text: str) -> bool:
    """No Lannisters allowed. Except Tyrion."""
    lowered = text.lower()
    return "lannister" in lowered and "tyrion" not in lowered


class MainWindow(QMainWindow):
    """Demo window with one validated name field."""

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Validation Fields")
        self.resize(420, 200)

        central = QWidget(self)
        central.setObjectName("centralWidget")
        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 24, 24, 48)
        layout.setSpacing(8)

        prompt = QLabel("Name")
        layout.addWidget(prompt)

        self.name_field = BorderedLineEdit(AccessiblePalette.TEXT_PRIMARY, Edge.BOTTOM, 4, central)
        self.name_field.setObjectName("nameField")
        self.name_field.setPlaceholderText("Enter a name")
        layout.addWidget(self.name_field)
        layout.addStretch(1)
        self.setCentralWidget(central)

        self.validation_field = ValidationTextField(self.name_field)
        self.validation_field.editing_color = AccessiblePalette.BORDER_EDITING
        self.validation_field.error_color = AccessiblePalette.BORDER_ERROR
        self.validation_field.valid_color = AccessiblePalette.BORDER_SUCCESS
        self.validation_field.message_font = message_font(10, self.name_field.font())
        self.validation_field.add_neutral_trigger(is_blank)
        self.validation_field.add_error_trigger(is_lannister, "No Lannisters allowed!")

        # End editing when the user clicks anywhere else in the window
        self._focus_filter = ClearFocusOnClick(self)

    def showEvent(self, event: QShowEvent) -> None:
        super().showEvent(event)
        self.validation_field.reframe()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        # Keep the message under the field after layout
        self.validation_field.reframe()
