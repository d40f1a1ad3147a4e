"""
Edge flags and border frame geometry.
"""

from __future__ import annotations

from enum import IntFlag

from PySide6.QtCore import QRectF

from .errors import UnsupportedEdgeError


class Edge(IntFlag):
    """Border directions. Values combine as a bit set."""

    TOP = 1
    BOTTOM = 2
    LEFT = 4
    RIGHT = 8
    ALL = 15


# Single edges in drawing order, excluding ALL
SINGLE_EDGES: tuple[Edge, ...] = (Edge.BOTTOM, Edge.LEFT, Edge.RIGHT, Edge.TOP)


def iter_edges(edges: Edge) -> list[Edge]:
    """Return the single edges set in ``edges``, in drawing order."""
    return [edge for edge in SINGLE_EDGES if (edge & edges) == edge]


def border_frame(bounds: QRectF, edge: Edge, width: float) -> QRectF:
    """
    Compute the overlay rectangle for one edge of ``bounds``.

    Args:
        bounds: Surface rectangle the border is drawn on
        edge: A single edge (composite flags are rejected)
        width: Border thickness

    Returns:
        The overlay frame

    Raises:
        UnsupportedEdgeError: If ``edge`` is not exactly one of the four edges
    """
    x, y, w, h = bounds.x(), bounds.y(), bounds.width(), bounds.height()

    if edge == Edge.TOP:
        return QRectF(x, y, w, width)
    if edge == Edge.BOTTOM:
        return QRectF(x, y + h - width, w, width)
    if edge == Edge.LEFT:
        return QRectF(x, y, width, h)
    if edge == Edge.RIGHT:
        return QRectF(x + w - width, y, width, h)
    raise UnsupportedEdgeError(edge)
