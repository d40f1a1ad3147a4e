"""
Click-to-dismiss focus handling.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QEvent, QObject
from PySide6.QtWidgets import QApplication, QLineEdit, QWidget

logger = logging.getLogger(__name__)


class ClearFocusOnClick(QObject):
    """
    Event filter that ends text editing when the user clicks elsewhere.

    Install it on a window; mouse presses outside the focused line edit clear
    its focus, which in turn ends editing on that field. Events are never
    consumed.
    """

    def __init__(self, window: QWidget) -> None:
        super().__init__(window)
        self._window = window
        window.installEventFilter(self)
        for child in window.findChildren(QWidget):
            child.installEventFilter(self)

    def watch(self, widget: QWidget) -> None:
        """Also watch a widget added to the window after installation."""
        widget.installEventFilter(self)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if event.type() == QEvent.Type.MouseButtonPress:
            focused = QApplication.focusWidget()
            if isinstance(focused, QLineEdit) and watched is not focused:
                logger.debug(f"Clearing focus from {focused.objectName() or type(focused).__name__}")
                focused.clearFocus()
        return False
