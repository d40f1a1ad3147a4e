"""
Configuration defaults for validation fields.

This module provides the default field style, the JSON schema that style
presets are checked against, and the FieldStyle value built from them.
Styles are plain in-memory mappings; nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import jsonschema

from .errors import ConfigError, ErrorCode
from .geometry import Edge

# Vertical gap between a field and its message label
MESSAGE_SPACING = 5

# Default field style with all supported keys
DEFAULT_FIELD_STYLE: dict[str, Any] = {
    "edges": ["bottom"],
    "width": 2,
    "colors": {
        "neutral": "#212529",  # Primary text color
        "valid": "#198754",  # Success green
        "error": "#dc3545",  # Error red
        "editing": "#0d6efd",  # Focus blue
    },
    "message_font_size": 10,
}

_COLOR_SCHEMA: dict[str, Any] = {"type": "string", "pattern": "^#([0-9a-fA-F]{6}|[0-9a-fA-F]{8})$"}

# JSON Schema for field style presets (draft-07)
FIELD_STYLE_JSON_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Validation field style",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "edges": {
            "type": "array",
            "items": {"type": "string", "enum": ["top", "bottom", "left", "right", "all"]},
            "minItems": 1,
            "uniqueItems": True,
        },
        "width": {"type": "number", "exclusiveMinimum": 0},
        "colors": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "neutral": _COLOR_SCHEMA,
                "valid": _COLOR_SCHEMA,
                "error": _COLOR_SCHEMA,
                "editing": _COLOR_SCHEMA,
            },
        },
        "message_font_size": {"type": "integer", "minimum": 1},
    },
}


@dataclass(frozen=True)
class FieldStyle:
    """Resolved border and message styling for one validation field."""

    edges: Edge
    width: float
    neutral_color: str
    valid_color: str
    error_color: str
    editing_color: str
    message_font_size: int


def parse_edges(names: list[str]) -> Edge:
    """Combine edge names such as ``["top", "bottom"]`` into one flag."""
    edges = Edge(0)
    for name in names:
        edges |= Edge[name.upper()]
    return edges


def load_field_style(overrides: dict[str, Any] | None = None) -> FieldStyle:
    """
    Build a FieldStyle from a preset mapping merged over the defaults.

    Args:
        overrides: Partial style mapping; missing keys fall back to
            DEFAULT_FIELD_STYLE

    Returns:
        The resolved style

    Raises:
        ConfigError: If the mapping does not match FIELD_STYLE_JSON_SCHEMA
    """
    overrides = overrides or {}
    try:
        jsonschema.validate(overrides, FIELD_STYLE_JSON_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ConfigError(
            code=ErrorCode.CONFIG_INVALID,
            user_message=f"Field style is invalid: {e.message}",
            technical_message=str(e),
            context={"path": "/".join(str(part) for part in e.absolute_path)},
        ) from e

    colors = {**DEFAULT_FIELD_STYLE["colors"], **overrides.get("colors", {})}
    return FieldStyle(
        edges=parse_edges(overrides.get("edges", DEFAULT_FIELD_STYLE["edges"])),
        width=float(overrides.get("width", DEFAULT_FIELD_STYLE["width"])),
        neutral_color=colors["neutral"],
        valid_color=colors["valid"],
        error_color=colors["error"],
        editing_color=colors["editing"],
        message_font_size=int(overrides.get("message_font_size", DEFAULT_FIELD_STYLE["message_font_size"])),
    )
