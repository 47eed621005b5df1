"""Active-workout screen.

Layout (top → bottom):
    - Session name, "Segment i of N", Stop button
    - Total time remaining
    - Segment countdown card (turns red in the last 5 seconds)
    - Current speed / incline
    - Speed / incline profile chart
    - Next segment preview
    - Pause/Resume + Skip buttons
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QPushButton, QFrame,
)

from ..timer.engine import WorkoutEngine
from ..timer.transitions import RunPhase, RunState, session_progress
from ..workout.models import Segment
from .profile_chart import ProfileChart
from .styles import PHASE_COLORS, fmt_clock


FINAL_SEGMENT_TEXT = "Final cool-down!"


def describe_segment(segment: Segment | None) -> str:
    """``"6.0 km/h | 2% | 3m"`` for the next-segment card."""
    if segment is None:
        return FINAL_SEGMENT_TEXT
    return f"{segment.speed:.1f} km/h | {segment.incline}% | {segment.duration // 60}m"


class RunnerWidget(QWidget):
    """Renders a ``WorkoutEngine`` and forwards the user's commands to it."""

    def __init__(self, engine: WorkoutEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._alarming = False
        self._build_ui()
        self._connect_signals()
        if engine.run_state is not None:
            self._on_phase_changed(engine.phase)
            self._refresh(engine.run_state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(14)

        # ── header ───────────────────────────────────────────────────
        header = QHBoxLayout()
        titles = QVBoxLayout()
        titles.setSpacing(2)
        self._name_label = QLabel(self)
        self._name_label.setObjectName("title")
        self._segment_label = QLabel(self)
        self._segment_label.setObjectName("muted")
        titles.addWidget(self._name_label)
        titles.addWidget(self._segment_label)
        header.addLayout(titles)
        header.addStretch()

        self._stop_btn = QPushButton("Stop", self)
        self._stop_btn.setObjectName("dangerButton")
        self._stop_btn.setToolTip("End the workout (Esc)")
        header.addWidget(self._stop_btn)
        layout.addLayout(header)

        # ── total remaining ──────────────────────────────────────────
        total_caption = QLabel("TOTAL TIME LEFT", self)
        total_caption.setObjectName("caption")
        total_caption.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._total_label = QLabel(self)
        self._total_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._total_label.setStyleSheet("font-size: 28px; font-weight: 800; color: #34D399;")
        layout.addWidget(total_caption)
        layout.addWidget(self._total_label)

        # ── segment countdown card ───────────────────────────────────
        self._countdown_card = QFrame(self)
        self._countdown_card.setObjectName("countdownCard")
        self._countdown_card.setProperty("alarming", False)
        card_layout = QVBoxLayout(self._countdown_card)
        card_layout.setContentsMargins(24, 16, 24, 24)
        card_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._alarm_banner = QLabel("HEADS UP!", self._countdown_card)
        self._alarm_banner.setObjectName("alarmBanner")
        self._alarm_banner.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._alarm_banner.setVisible(False)

        seg_caption = QLabel("NEXT SEGMENT IN", self._countdown_card)
        seg_caption.setObjectName("caption")
        seg_caption.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._countdown_label = QLabel(self._countdown_card)
        self._countdown_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        card_layout.addWidget(self._alarm_banner)
        card_layout.addWidget(seg_caption)
        card_layout.addWidget(self._countdown_label)
        layout.addWidget(self._countdown_card)

        # ── current targets ──────────────────────────────────────────
        stats = QGridLayout()
        stats.setHorizontalSpacing(12)
        for col, (caption, attr, name) in enumerate((
            ("SPEED", "_speed_label", "speedValue"),
            ("INCLINE", "_incline_label", "inclineValue"),
        )):
            box = QFrame(self)
            box.setObjectName("card")
            box_layout = QVBoxLayout(box)
            box_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
            cap = QLabel(caption, box)
            cap.setObjectName("caption")
            cap.setAlignment(Qt.AlignmentFlag.AlignCenter)
            value = QLabel(box)
            value.setObjectName(name)
            value.setAlignment(Qt.AlignmentFlag.AlignCenter)
            box_layout.addWidget(cap)
            box_layout.addWidget(value)
            setattr(self, attr, value)
            stats.addWidget(box, 0, col)
        layout.addLayout(stats)

        # ── profile chart ────────────────────────────────────────────
        self._chart = ProfileChart(self)
        self._chart.setFixedHeight(96)
        layout.addWidget(self._chart)

        # ── next segment ─────────────────────────────────────────────
        next_card = QFrame(self)
        next_card.setObjectName("nextCard")
        next_layout = QVBoxLayout(next_card)
        next_layout.setContentsMargins(16, 10, 16, 10)
        next_caption = QLabel("NEXT", next_card)
        next_caption.setObjectName("caption")
        self._next_label = QLabel(next_card)
        next_layout.addWidget(next_caption)
        next_layout.addWidget(self._next_label)
        layout.addWidget(next_card)

        layout.addStretch()

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(16)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._pause_btn = QPushButton("Pause", self)
        self._pause_btn.setObjectName("primaryButton")
        self._pause_btn.setToolTip("Pause / resume (Space)")

        self._skip_btn = QPushButton("Skip", self)
        self._skip_btn.setObjectName("secondaryButton")
        self._skip_btn.setToolTip("Jump to the next segment (→)")

        # Space, Right and Escape belong to the window shortcuts.
        for btn in (self._pause_btn, self._skip_btn, self._stop_btn):
            btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        btn_row.addWidget(self._pause_btn)
        btn_row.addWidget(self._skip_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._pause_btn.clicked.connect(self._engine.toggle_pause)
        self._skip_btn.clicked.connect(self._engine.skip)
        self._stop_btn.clicked.connect(self._engine.cancel)

        self._engine.updated.connect(self._refresh)
        self._engine.state_changed.connect(self._on_phase_changed)
        self._engine.segment_changed.connect(self._chart.set_current_index)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_phase_changed(self, phase: RunPhase) -> None:
        self._pause_btn.setText("Resume" if phase is RunPhase.PAUSED else "Pause")
        active = phase in (RunPhase.RUNNING, RunPhase.PAUSED)
        self._pause_btn.setEnabled(active)
        self._skip_btn.setEnabled(active)
        self._stop_btn.setEnabled(active)

        color = PHASE_COLORS.get(phase, "#F1F5F9")
        self._countdown_label.setStyleSheet(
            f"font-size: 72px; font-weight: 900; color: {color};"
        )

    def _refresh(self, state: RunState) -> None:
        engine = self._engine
        session = engine.session
        self._name_label.setText(session.name)
        self._segment_label.setText(
            f"Segment {state.segment_index + 1} of {len(session.segments)}"
        )
        self._total_label.setText(fmt_clock(engine.total_seconds_left))
        self._countdown_label.setText(fmt_clock(state.segment_seconds_left))

        segment = engine.current_segment
        self._speed_label.setText(f"{segment.speed:.1f} km/h")
        self._incline_label.setText(f"{segment.incline}%")
        self._next_label.setText(describe_segment(engine.next_segment))

        self._chart.set_session(session)
        self._chart.set_current_index(state.segment_index)
        self._chart.set_progress(session_progress(state, session))
        self._set_alarming(engine.is_alarming)

    def _set_alarming(self, alarming: bool) -> None:
        if alarming == self._alarming:
            return
        self._alarming = alarming
        self._alarm_banner.setVisible(alarming)
        card = self._countdown_card
        card.setProperty("alarming", alarming)
        # Re-evaluate the [alarming="true"] selector.
        card.style().unpolish(card)
        card.style().polish(card)

    # ── accessors (used by the window and tests) ──────────────────────────

    @property
    def engine(self) -> WorkoutEngine:
        return self._engine

    @property
    def is_alarming(self) -> bool:
        return self._alarming
