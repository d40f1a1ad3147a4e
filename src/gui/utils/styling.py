"""
Shared styling utilities for validation field widgets.

This module contains the color palette used by the demo and helpers for
turning the color values callers pass in into QColor and QFont objects.
"""

from __future__ import annotations

from typing import Union

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QFont, QPalette
from PySide6.QtWidgets import QLabel

ColorLike = Union[QColor, Qt.GlobalColor, str]


class AccessiblePalette:
    """
    Centralized color palette for field borders and messages.

    Text colors meet a 4.5:1 contrast ratio on a white background.
    """

    TEXT_PRIMARY = "#212529"  # Primary text color

    BORDER_EDITING = "#95a5a6"  # Muted gray while the user types
    BORDER_ERROR = "#d24d57"  # Error state border
    BORDER_SUCCESS = "#65c6bb"  # Valid state border



def to_qcolor(value: ColorLike) -> QColor:
    """
    Convert a color value to a QColor.

    Args:
        value: QColor, Qt.GlobalColor or a color name such as ``"#d24d57"``

    Raises:
        ValueError: If the value does not name a valid color
    """
    color = QColor(value)
    if not color.isValid():
        raise ValueError(f"Invalid color: {value!r}")
    return color


def message_font(point_size: int, base: QFont | None = None) -> QFont:
    """Copy ``base`` (or the default font) at ``point_size``."""
    font = QFont(base) if base is not None else QFont()
    font.setPointSize(point_size)
    return font


def set_label_text_color(label: QLabel, color: QColor) -> None:
    """Set the foreground color of ``label`` through its palette."""
    palette = label.palette()
    palette.setColor(QPalette.ColorRole.WindowText, color)
    label.setPalette(palette)
