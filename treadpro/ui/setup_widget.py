"""Setup screen: review and edit a session's segments before running it.

Every edit goes through ``Session.with_segment`` so speed, incline and
duration are clamped to the authoring limits.  Custom sessions can also
add and remove segments, but never drop below ``MIN_SEGMENTS``.  The Start
button is only enabled while ``session.can_start`` holds.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QPushButton, QSpinBox, QDoubleSpinBox, QScrollArea, QFrame,
)

from ..workout.models import (
    Session, MAX_SPEED, MAX_INCLINE, SPEED_STEP, MAX_SEGMENT_DURATION,
)
from .styles import fmt_clock


class _SegmentRow:
    """Spin boxes for one segment."""

    def __init__(self, parent: QWidget) -> None:
        self.minutes = QSpinBox(parent)
        self.minutes.setRange(0, MAX_SEGMENT_DURATION // 60)
        self.minutes.setSuffix(" m")
        self.seconds = QSpinBox(parent)
        self.seconds.setRange(0, 59)
        self.seconds.setSuffix(" s")
        self.speed = QDoubleSpinBox(parent)
        self.speed.setRange(0.0, MAX_SPEED)
        self.speed.setSingleStep(SPEED_STEP)
        self.speed.setDecimals(1)
        self.speed.setSuffix(" km/h")
        self.incline = QSpinBox(parent)
        self.incline.setRange(0, MAX_INCLINE)
        self.incline.setSuffix(" %")
        self.remove = QPushButton("✕", parent)
        self.remove.setObjectName("secondaryButton")
        self.remove.setToolTip("Remove segment")

    @property
    def inputs(self) -> tuple[QWidget, ...]:
        return (self.minutes, self.seconds, self.speed, self.incline)


class SetupWidget(QWidget):
    """Segment editor.

    Signals
    -------
    start_requested(session: Session)
        The user pressed Start on a startable session.
    back_requested()
        Return to the home screen without running.
    """

    start_requested = pyqtSignal(object)
    back_requested = pyqtSignal()

    def __init__(self, session: Session, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._session = session
        self._rows: list[_SegmentRow] = []
        self._build_ui()
        self._rebuild_rows()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(12)

        header = QHBoxLayout()
        self._back_btn = QPushButton("Back", self)
        self._back_btn.setObjectName("secondaryButton")
        self._back_btn.clicked.connect(self.back_requested.emit)
        header.addWidget(self._back_btn)
        header.addStretch()
        root.addLayout(header)

        self._name_label = QLabel(self._session.name, self)
        self._name_label.setObjectName("title")
        self._desc_label = QLabel(self._session.description, self)
        self._desc_label.setObjectName("muted")
        self._desc_label.setWordWrap(True)
        self._summary_label = QLabel(self)
        self._summary_label.setObjectName("muted")
        root.addWidget(self._name_label)
        root.addWidget(self._desc_label)
        root.addWidget(self._summary_label)

        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        self._grid_host = QFrame()
        self._grid_host.setObjectName("card")
        self._grid = QGridLayout(self._grid_host)
        self._grid.setContentsMargins(12, 12, 12, 12)
        self._grid.setHorizontalSpacing(8)
        self._grid.setVerticalSpacing(8)
        scroll.setWidget(self._grid_host)
        root.addWidget(scroll, 1)

        self._add_btn = QPushButton("+ Add segment", self)
        self._add_btn.setObjectName("secondaryButton")
        self._add_btn.clicked.connect(self._on_add)
        self._add_btn.setVisible(self._session.is_custom)
        root.addWidget(self._add_btn)

        self._hint_label = QLabel(self)
        self._hint_label.setObjectName("muted")
        self._hint_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._hint_label)

        self._start_btn = QPushButton("Start", self)
        self._start_btn.setObjectName("primaryButton")
        self._start_btn.clicked.connect(self._on_start)
        root.addWidget(self._start_btn)

    def _rebuild_rows(self) -> None:
        while self._grid.count():
            item = self._grid.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self._rows.clear()

        for col, text in enumerate(("#", "Time", "", "Speed", "Incline")):
            lbl = QLabel(text, self._grid_host)
            lbl.setObjectName("caption")
            self._grid.addWidget(lbl, 0, col)

        removable = self._session.is_custom
        for i, _segment in enumerate(self._session.segments):
            row = _SegmentRow(self._grid_host)
            self._grid.addWidget(QLabel(str(i + 1), self._grid_host), i + 1, 0)
            for col, widget in enumerate(row.inputs, start=1):
                self._grid.addWidget(widget, i + 1, col)
            self._grid.addWidget(row.remove, i + 1, 5)
            row.remove.setVisible(removable)

            for widget in row.inputs:
                widget.valueChanged.connect(lambda _v, idx=i: self._on_row_edited(idx))
            row.remove.clicked.connect(lambda _=False, idx=i: self._on_remove(idx))
            self._rows.append(row)

        for i in range(len(self._rows)):
            self._populate_row(i)
        self._refresh_summary()

    def _populate_row(self, index: int) -> None:
        row = self._rows[index]
        segment = self._session.segments[index]
        minutes, seconds = divmod(segment.duration, 60)
        for widget in row.inputs:
            widget.blockSignals(True)
        row.minutes.setValue(minutes)
        row.seconds.setValue(seconds)
        row.speed.setValue(segment.speed)
        row.incline.setValue(segment.incline)
        for widget in row.inputs:
            widget.blockSignals(False)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_row_edited(self, index: int) -> None:
        row = self._rows[index]
        self._session = self._session.with_segment(
            index,
            duration=row.minutes.value() * 60 + row.seconds.value(),
            speed=row.speed.value(),
            incline=row.incline.value(),
        )
        # Reflect clamping (e.g. 0m 0s becomes 0m 1s).
        self._populate_row(index)
        self._refresh_summary()

    def _on_add(self) -> None:
        self._session = self._session.add_segment()
        self._rebuild_rows()

    def _on_remove(self, index: int) -> None:
        updated = self._session.remove_segment(index)
        if updated is self._session:
            return
        self._session = updated
        self._rebuild_rows()

    def _on_start(self) -> None:
        if self._session.can_start:
            self.start_requested.emit(self._session)

    def _refresh_summary(self) -> None:
        s = self._session
        self._summary_label.setText(
            f"{len(s.segments)} segments  ·  {fmt_clock(s.total_duration)}"
            f"  ·  {s.total_distance_km:.2f} km"
        )
        at_min = len(s.segments) <= s.min_segments
        for row in self._rows:
            row.remove.setEnabled(not at_min)
        self._start_btn.setEnabled(s.can_start)
        if s.can_start:
            self._hint_label.setText("")
        else:
            self._hint_label.setText(f"Add at least {s.min_segments} segments to start.")

    # ── public ────────────────────────────────────────────────────────────

    @property
    def session(self) -> Session:
        return self._session

    @property
    def start_button(self) -> QPushButton:
        return self._start_btn
