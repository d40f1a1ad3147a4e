"""
Per-edge border overlays for a rectangular surface.

The renderer keeps at most one overlay per edge and updates overlays in place
instead of recreating them, so the surface never accumulates duplicates no
matter how often the border is re-applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from PySide6.QtCore import QRectF
from PySide6.QtGui import QColor

from .geometry import SINGLE_EDGES, Edge, border_frame, iter_edges

logger = logging.getLogger(__name__)

# Overlay naming prefix
OVERLAY_NAME_PREFIX = "color-borders-ext"


def overlay_name(edge: Edge) -> str:
    """Stable identity for the overlay drawn on ``edge``."""
    return f"{OVERLAY_NAME_PREFIX}.{edge.name}"


@dataclass
class BorderSpec:
    """Color, width and active edges of a border."""

    color: QColor
    width: float
    edges: Edge = Edge.ALL


@dataclass
class EdgeOverlay:
    """A thin colored rectangle drawn over one edge of the surface."""

    edge: Edge
    frame: QRectF = field(default_factory=QRectF)
    color: QColor = field(default_factory=QColor)
    width: float = 0.0

    @property
    def name(self) -> str:
        return overlay_name(self.edge)


class BorderOverlayRenderer:
    """
    Maintains up to four edge overlays for one surface.

    Overlays are keyed by edge, so applying the same border repeatedly only
    refreshes attributes. Overlays for edges that are later dropped from the
    border spec are kept as they were.
    """

    def __init__(self) -> None:
        self._overlays: dict[Edge, EdgeOverlay] = {}

    def apply_border(self, bounds: QRectF, spec: BorderSpec) -> None:
        """
        Create or update the overlay of every edge set in ``spec.edges``.

        Args:
            bounds: Current rectangle of the surface
            spec: Border color, width and edges to draw
        """
        for edge in iter_edges(spec.edges):
            overlay = self._overlays.get(edge)
            if overlay is None:
                overlay = EdgeOverlay(edge)
                self._overlays[edge] = overlay
                logger.debug(f"Created border overlay {overlay.name}")

            overlay.frame = border_frame(bounds, edge, spec.width)
            overlay.width = spec.width
            overlay.color = QColor(spec.color)

    def overlay(self, edge: Edge) -> EdgeOverlay | None:
        """Get the overlay for a single edge, if one was drawn."""
        return self._overlays.get(edge)

    def overlays(self) -> list[EdgeOverlay]:
        """All overlays in drawing order."""
        return [self._overlays[edge] for edge in SINGLE_EDGES if edge in self._overlays]

    def clear(self) -> None:
        """Forget every overlay."""
        self._overlays.clear()

    def __len__(self) -> int:
        return len(self._overlays)
