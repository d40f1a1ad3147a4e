"""
GUI-specific utilities for the validation field widgets.

This module contains utility functions and classes that are specific
to the widget implementation.
"""

from .focus import ClearFocusOnClick
from .styling import (
    AccessiblePalette,
    ColorLike,
    message_font,
    set_label_text_color,
    to_qcolor,
)

__all__ = [
    "AccessiblePalette",
    "ClearFocusOnClick",
    "ColorLike",
    "message_font",
    "set_label_text_color",
    "to_qcolor",
]
