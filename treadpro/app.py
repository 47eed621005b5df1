"""Main application window for TreadPro."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QStackedWidget, QMessageBox, QWidget

from .audio.sounds import CueNotifier
from .settings import Settings, load_settings, save_settings
from .timer.engine import WorkoutEngine
from .ui.home_widget import HomeWidget
from .ui.runner_widget import RunnerWidget
from .ui.settings_dialog import SettingsDialog
from .ui.setup_widget import SetupWidget
from .ui.styles import build_stylesheet
from .ui.summary_widget import SummaryWidget
from .workout.models import Session


logger = logging.getLogger(__name__)


class TreadProApp(QMainWindow):
    """Main application window.

    Hosts one view at a time (home → setup → active → summary) and owns
    the ``WorkoutEngine`` of the run in progress, if any.  A new engine is
    built for every run and released when it finishes or is cancelled.
    """

    def __init__(
        self,
        *,
        cues: CueNotifier | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("TreadPro")
        self.setMinimumSize(420, 720)

        # ── geometry save debounce ────────────────────────────────────
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings + collaborators ──────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self._cues = cues or CueNotifier(parent=self)
        self._engine: WorkoutEngine | None = None

        # ── views ─────────────────────────────────────────────────────
        self._stack = QStackedWidget(self)
        self.setCentralWidget(self._stack)
        self._view: QWidget | None = None

        self.setStyleSheet(build_stylesheet())
        self._build_menu_bar()
        self._apply_settings()
        self._restore_geometry()
        self.show_home()

    # ══════════════════════════════════════════════════════════════════
    #  NAVIGATION
    # ══════════════════════════════════════════════════════════════════

    def _set_view(self, widget: QWidget) -> None:
        old = self._view
        self._stack.addWidget(widget)
        self._stack.setCurrentWidget(widget)
        self._view = widget
        if old is not None:
            self._stack.removeWidget(old)
            old.deleteLater()

    def show_home(self) -> None:
        home = HomeWidget(parent=self._stack)
        home.session_chosen.connect(self.show_setup)
        self._set_view(home)

    def show_setup(self, session: Session) -> None:
        setup = SetupWidget(session, parent=self._stack)
        setup.start_requested.connect(self.start_run)
        setup.back_requested.connect(self.show_home)
        self._set_view(setup)

    def start_run(self, session: Session) -> None:
        if self._engine is not None:
            logger.debug("start_run ignored: a run is already active")
            return
        if not session.can_start:
            logger.warning("Refusing to start %r: not enough segments", session.name)
            return

        # Start is the user gesture that may open the audio device.
        self._cues.unlock()

        engine = WorkoutEngine(self)
        engine.countdown_cue.connect(self._cues.on_countdown_cue)
        engine.segment_end_cue.connect(self._cues.on_segment_end_cue)
        engine.finished.connect(self._on_run_finished)
        engine.cancelled.connect(self._on_run_cancelled)
        self._engine = engine

        self._set_view(RunnerWidget(engine, parent=self._stack))
        engine.start(session)

    def show_summary(self, session: Session, elapsed: int) -> None:
        summary = SummaryWidget(session, elapsed, parent=self._stack)
        summary.home_requested.connect(self.show_home)
        self._set_view(summary)

    # ══════════════════════════════════════════════════════════════════
    #  ENGINE SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_run_finished(self) -> None:
        engine = self._engine
        if engine is None:
            return
        self._cues.on_finished_cue()
        session, elapsed = engine.session, engine.total_seconds_elapsed
        self._release_engine()
        self.show_summary(session, elapsed)

    def _on_run_cancelled(self) -> None:
        self._release_engine()
        self.show_home()

    def _release_engine(self) -> None:
        engine, self._engine = self._engine, None
        if engine is not None:
            engine.deleteLater()

    @property
    def engine(self) -> WorkoutEngine | None:
        return self._engine

    @property
    def current_view(self) -> QWidget | None:
        return self._view

    # ══════════════════════════════════════════════════════════════════
    #  MENU + SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        about_action = QAction("About TreadPro", self)
        about_action.setMenuRole(QAction.MenuRole.AboutRole)
        about_action.triggered.connect(self._show_about)

        prefs_action = QAction("Preferences…", self)
        prefs_action.setMenuRole(QAction.MenuRole.PreferencesRole)
        prefs_action.setShortcut(QKeySequence("Ctrl+,"))
        prefs_action.triggered.connect(self._open_settings)

        quit_action = QAction("Quit TreadPro", self)
        quit_action.setMenuRole(QAction.MenuRole.QuitRole)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self._quit_with_confirm)

        app_menu = menu_bar.addMenu("TreadPro")
        app_menu.addAction(about_action)
        app_menu.addAction(prefs_action)
        app_menu.addAction(quit_action)

    def _show_about(self) -> None:
        QMessageBox.about(
            self,
            "About TreadPro",
            "<h3>TreadPro</h3>"
            "<p>Interval timer for treadmill sessions: timed segments with "
            "speed and incline targets, and audio cues before every change.</p>",
        )

    def _open_settings(self) -> None:
        """Open the settings dialog and apply any changes."""

        def _preview() -> None:
            self._apply_settings()
            self._cues.unlock()
            self._cues.on_segment_end_cue()

        dlg = SettingsDialog(
            self._settings, parent=self, sound_preview_callback=_preview,
        )
        dlg.exec()
        self._apply_settings()

    def _apply_settings(self) -> None:
        """Push current Settings into the cue notifier."""
        s = self._settings
        self._cues.set_volume(s.sound_volume)
        self._cues.set_enabled(s.sound_enabled)
        self._cues.set_countdown_enabled(s.countdown_cues)

    def _quit_with_confirm(self) -> None:
        """Quit, but ask first if a workout is in progress."""
        if self._engine is not None and self._engine.is_active:
            reply = QMessageBox.question(
                self,
                "Quit TreadPro?",
                "A workout is still running. Quit anyway?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                QMessageBox.StandardButton.No,
            )
            if reply != QMessageBox.StandardButton.Yes:
                return
        self.close()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        try:
            save_settings(self._settings)
        except OSError:
            logger.warning("Could not save window geometry", exc_info=True)

    def _schedule_geometry_save(self) -> None:
        """Debounce geometry saves: restart the 500ms timer on each move/resize."""
        if hasattr(self, "_geometry_save_timer"):
            self._geometry_save_timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD
    # ══════════════════════════════════════════════════════════════════

    def _on_space(self) -> None:
        """Pause or resume the active run."""
        if self._engine is not None:
            self._engine.toggle_pause()

    def _on_skip_key(self) -> None:
        if self._engine is not None:
            self._engine.skip()

    def _on_escape(self) -> None:
        """Stop the active run (no-op otherwise)."""
        if self._engine is not None:
            self._engine.cancel()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._save_geometry()
        if self._engine is not None:
            self._engine.cancel()
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space (pause/resume), Right (skip) and Escape (stop)."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._on_space()
            event.accept()
            return
        if key == Qt.Key.Key_Right and not event.modifiers():
            self._on_skip_key()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._on_escape()
            event.accept()
            return
        super().keyPressEvent(event)
