"""
Reusable GUI widgets for validated text entry.

This module contains custom widgets that can be reused across different
parts of an application.
"""

from .bordered_line_edit import BorderedLineEdit
from .validation_text_field import ValidationTextField

__all__ = ["BorderedLineEdit", "ValidationTextField"]
