"""
Tests for click-to-dismiss focus handling.
"""

from unittest.mock import patch

from PySide6.QtCore import QEvent
from PySide6.QtWidgets import QLabel, QLineEdit, QVBoxLayout

from gui.utils.focus import ClearFocusOnClick


class TestClearFocusOnClick:
    """Test the focus-clearing event filter."""

    def setup_method(self):
        self.press = QEvent(QEvent.Type.MouseButtonPress)

    def _build(self, host):
        layout = QVBoxLayout(host)
        line_edit = QLineEdit()
        label = QLabel("Name")
        layout.addWidget(label)
        layout.addWidget(line_edit)
        return line_edit, label, ClearFocusOnClick(host)

    def test_click_elsewhere_clears_focus(self, host):
        line_edit, label, focus_filter = self._build(host)

        with patch("gui.utils.focus.QApplication") as app_mock, patch.object(line_edit, "clearFocus") as clear_focus:
            app_mock.focusWidget.return_value = line_edit
            consumed = focus_filter.eventFilter(label, self.press)

        clear_focus.assert_called_once()
        assert consumed is False

    def test_click_on_focused_field_keeps_focus(self, host):
        line_edit, _, focus_filter = self._build(host)

        with patch("gui.utils.focus.QApplication") as app_mock, patch.object(line_edit, "clearFocus") as clear_focus:
            app_mock.focusWidget.return_value = line_edit
            focus_filter.eventFilter(line_edit, self.press)

        clear_focus.assert_not_called()

    def test_other_events_are_ignored(self, host):
        line_edit, label, focus_filter = self._build(host)

        with patch("gui.utils.focus.QApplication") as app_mock, patch.object(line_edit, "clearFocus") as clear_focus:
            app_mock.focusWidget.return_value = line_edit
            focus_filter.eventFilter(label, QEvent(QEvent.Type.KeyPress))

        clear_focus.assert_not_called()

    def test_no_focused_line_edit(self, host):
        _, label, focus_filter = self._build(host)

        with patch("gui.utils.focus.QApplication") as app_mock:
            app_mock.focusWidget.return_value = None
            assert focus_filter.eventFilter(label, self.press) is False
