"""Completion screen shown after a run finishes."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QLabel, QPushButton, QFrame

from ..workout.models import Session
from .styles import fmt_clock


class SummaryWidget(QWidget):
    """Session-complete card.

    ``elapsed`` is the run's ``total_seconds_elapsed``, which includes time
    credited by skips, so it always equals the plan's total duration.
    """

    home_requested = pyqtSignal()

    def __init__(
        self, session: Session, elapsed: int, parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 24, 24, 24)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)

        card = QFrame(self)
        card.setObjectName("card")
        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 32, 32, 32)
        layout.setSpacing(10)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        trophy = QLabel("🏆", card)
        trophy.setAlignment(Qt.AlignmentFlag.AlignCenter)
        trophy.setStyleSheet("font-size: 48px;")
        title = QLabel("SESSION COMPLETE!", card)
        title.setObjectName("title")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        blurb = QLabel("You finished every segment. Great work!", card)
        blurb.setObjectName("muted")
        blurb.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._stats_label = QLabel(
            f"{session.name}\n"
            f"{fmt_clock(elapsed)}  ·  {len(session.segments)} segments"
            f"  ·  {session.total_distance_km:.2f} km",
            card,
        )
        self._stats_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        home_btn = QPushButton("Back to home", card)
        home_btn.setObjectName("primaryButton")
        home_btn.clicked.connect(self.home_requested.emit)

        for widget in (trophy, title, blurb, self._stats_label):
            layout.addWidget(widget)
        layout.addSpacing(16)
        layout.addWidget(home_btn)
        root.addWidget(card)

    @property
    def stats_text(self) -> str:
        return self._stats_label.text()
