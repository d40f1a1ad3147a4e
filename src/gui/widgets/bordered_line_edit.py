"""
Line edit with colored edge borders.
"""

from __future__ import annotations

from PySide6.QtCore import QRectF, Signal
from PySide6.QtGui import QColor, QFocusEvent, QPainter, QPaintEvent, QResizeEvent
from PySide6.QtWidgets import QLineEdit, QWidget

from core.border import BorderOverlayRenderer, BorderSpec, EdgeOverlay
from core.geometry import Edge
from gui.utils.styling import ColorLike, to_qcolor


class BorderedLineEdit(QLineEdit):
    """
    QLineEdit that draws its border as per-edge overlays.

    Changing the border properties does not repaint by itself; call
    ``redraw_border`` once the new values are set. Overlays follow the
    widget's size automatically.

    Signals:
        editingBegan(): The field gained focus
        editingEnded(): The field lost focus
    """

    editingBegan = Signal()
    editingEnded = Signal()

    def __init__(
        self,
        color: ColorLike,
        edges: Edge = Edge.ALL,
        width: float = 1.0,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._spec = BorderSpec(to_qcolor(color), float(width), Edge(edges))
        self._renderer = BorderOverlayRenderer()
        self._bounds = QRectF()
        self._applied = BorderSpec(QColor(self._spec.color), self._spec.width, self._spec.edges)

        # Overlays replace the native frame
        self.setFrame(False)
        self.redraw_border()

    @property
    def border_color(self) -> QColor:
        return QColor(self._spec.color)

    @border_color.setter
    def border_color(self, color: ColorLike) -> None:
        self._spec.color = to_qcolor(color)

    @property
    def border_edges(self) -> Edge:
        return self._spec.edges

    @border_edges.setter
    def border_edges(self, edges: Edge) -> None:
        self._spec.edges = Edge(edges)

    @property
    def border_width(self) -> float:
        return self._spec.width

    @border_width.setter
    def border_width(self, width: float) -> None:
        self._spec.width = float(width)

    @property
    def renderer(self) -> BorderOverlayRenderer:
        return self._renderer

    def overlays(self) -> list[EdgeOverlay]:
        """Overlays in drawing order, with frames matching the current size."""
        self._sync_bounds()
        return self._renderer.overlays()

    def redraw_border(self) -> None:
        """Apply the current border properties and schedule a repaint."""
        self._apply_border()
        self.update()

    def _apply_border(self, spec: BorderSpec | None = None) -> None:
        if spec is None:
            spec = BorderSpec(QColor(self._spec.color), self._spec.width, self._spec.edges)
        self._applied = spec
        self._bounds = QRectF(self.rect())
        self._renderer.apply_border(self._bounds, spec)

    def _sync_bounds(self) -> None:
        # Resize events are deferred while the widget is hidden, so frames
        # are refreshed from the last applied border when the size changed
        if QRectF(self.rect()) != self._bounds:
            self._apply_border(self._applied)

    def paintEvent(self, event: QPaintEvent) -> None:
        super().paintEvent(event)
        painter = QPainter(self)
        try:
            for overlay in self.overlays():
                painter.fillRect(overlay.frame, overlay.color)
        finally:
            painter.end()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self.redraw_border()

    def focusInEvent(self, event: QFocusEvent) -> None:
        super().focusInEvent(event)
        self.editingBegan.emit()

    def focusOutEvent(self, event: QFocusEvent) -> None:
        super().focusOutEvent(event)
        self.editingEnded.emit()
