"""Step chart of a session's speed and incline profile.

Each segment is a column whose width is proportional to its duration.
Speed (blue) and incline (orange) are drawn as step lines, scaled to
``MAX_SPEED`` / ``MAX_INCLINE``.  The current segment is shaded and a
thin playhead marks overall session progress.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QPainter, QPen, QColor, QPainterPath
from PyQt6.QtWidgets import QWidget

from ..workout.models import Session, MAX_SPEED, MAX_INCLINE
from .styles import PALETTE


class ProfileChart(QWidget):
    """Custom-painted speed/incline profile."""

    LINE_WIDTH = 3
    PADDING = 6

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumHeight(72)

        self._session: Session | None = None
        self._current_index: int = -1
        self._progress: float = 0.0

        self._speed_color = QColor(PALETTE["speed"])
        self._incline_color = QColor(PALETTE["incline"])
        self._highlight = QColor(255, 255, 255, 26)
        self._playhead = QColor(PALETTE["text_muted"])

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC API
    # ══════════════════════════════════════════════════════════════════

    def set_session(self, session: Session | None) -> None:
        self._session = session
        self.update()

    def set_current_index(self, index: int) -> None:
        self._current_index = index
        self.update()

    def set_progress(self, progress: float) -> None:
        """Overall session progress, 0..1."""
        self._progress = max(0.0, min(1.0, progress))
        self.update()

    @property
    def current_index(self) -> int:
        return self._current_index

    def column_rects(self) -> list[QRectF]:
        """One rect per segment, in widget coordinates."""
        if self._session is None:
            return []
        area = self._plot_area()
        total = self._session.total_duration
        rects: list[QRectF] = []
        x = area.left()
        for seg in self._session.segments:
            w = area.width() * seg.duration / total
            rects.append(QRectF(x, area.top(), w, area.height()))
            x += w
        return rects

    # ══════════════════════════════════════════════════════════════════
    #  PAINTING
    # ══════════════════════════════════════════════════════════════════

    def _plot_area(self) -> QRectF:
        pad = self.PADDING
        return QRectF(pad, pad, self.width() - 2 * pad, self.height() - 2 * pad)

    def _step_path(self, values: list[float], ceiling: float) -> QPainterPath:
        area = self._plot_area()
        path = QPainterPath()
        for i, (rect, value) in enumerate(zip(self.column_rects(), values)):
            y = area.bottom() - area.height() * min(value, ceiling) / ceiling
            if i == 0:
                path.moveTo(QPointF(rect.left(), y))
            else:
                path.lineTo(QPointF(rect.left(), y))
            path.lineTo(QPointF(rect.right(), y))
        return path

    def paintEvent(self, event) -> None:  # type: ignore[override]
        if self._session is None:
            return
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)

        rects = self.column_rects()
        if 0 <= self._current_index < len(rects):
            p.fillRect(rects[self._current_index], self._highlight)

        segments = self._session.segments
        for values, ceiling, color in (
            ([s.speed for s in segments], MAX_SPEED, self._speed_color),
            ([float(s.incline) for s in segments], float(MAX_INCLINE), self._incline_color),
        ):
            pen = QPen(color, self.LINE_WIDTH)
            pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
            p.setPen(pen)
            p.setBrush(Qt.BrushStyle.NoBrush)
            p.drawPath(self._step_path(values, ceiling))

        area = self._plot_area()
        x = area.left() + area.width() * self._progress
        p.setPen(QPen(self._playhead, 1))
        p.drawLine(QPointF(x, area.top()), QPointF(x, area.bottom()))
        p.end()
