"""Home screen: built-in plans plus a "new custom session" card."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QLabel, QPushButton, QScrollArea

from ..workout.catalog import DEFAULT_SESSIONS, new_custom_session
from ..workout.models import Session
from .styles import fmt_minutes


def card_text(session: Session) -> str:
    return (
        f"{session.name}\n"
        f"{session.description}\n"
        f"{len(session.segments)} SEGMENTS  ·  {fmt_minutes(session.total_duration).upper()}"
    )


class HomeWidget(QWidget):
    """Lists the session catalog.

    Signals
    -------
    session_chosen(session: Session)
        A catalog plan or a fresh custom session was picked for setup.
    """

    session_chosen = pyqtSignal(object)

    def __init__(
        self,
        sessions: tuple[Session, ...] = DEFAULT_SESSIONS,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._sessions = sessions
        self._cards: list[QPushButton] = []
        self._build_ui()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        root.addWidget(scroll)

        body = QWidget()
        layout = QVBoxLayout(body)
        layout.setContentsMargins(24, 28, 24, 24)
        layout.setSpacing(12)

        title = QLabel("TreadPro", body)
        title.setStyleSheet("font-size: 34px; font-weight: 900;")
        tagline = QLabel("Take your treadmill training to the next level.", body)
        tagline.setObjectName("muted")
        layout.addWidget(title)
        layout.addWidget(tagline)
        layout.addSpacing(16)

        section = QLabel("PLANS", body)
        section.setObjectName("caption")
        layout.addWidget(section)

        for session in self._sessions:
            btn = QPushButton(card_text(session), body)
            btn.setObjectName("sessionCard")
            btn.clicked.connect(lambda _=False, s=session: self.session_chosen.emit(s))
            self._cards.append(btn)
            layout.addWidget(btn)

        layout.addSpacing(16)
        self._custom_btn = QPushButton("+  New custom session", body)
        self._custom_btn.setObjectName("customCard")
        self._custom_btn.clicked.connect(self._on_custom)
        layout.addWidget(self._custom_btn)
        layout.addStretch()

        scroll.setWidget(body)

    def _on_custom(self) -> None:
        self.session_chosen.emit(new_custom_session())

    @property
    def cards(self) -> list[QPushButton]:
        return list(self._cards)
