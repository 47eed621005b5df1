"""Settings dialog for TreadPro.

A modal dialog for audio preferences.  Changes are saved immediately to
disk and the caller re-applies them when the dialog closes.
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSlider, QCheckBox, QPushButton, QWidget,
)

from ..settings import Settings, save_settings


class SettingsDialog(QDialog):
    """Modal dialog for sound preferences."""

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        sound_preview_callback: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(380)
        self.setModal(True)

        self._settings = settings
        self._sound_preview = sound_preview_callback

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        title = QLabel("Sound")
        title.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        root.addWidget(title)

        form = QFormLayout()
        form.setContentsMargins(0, 0, 0, 0)
        form.setHorizontalSpacing(20)
        form.setVerticalSpacing(10)

        self._sound_cb = QCheckBox("Audio cues")
        self._sound_cb.toggled.connect(self._on_toggle_changed)
        form.addRow("", self._sound_cb)

        self._countdown_cb = QCheckBox("Beep during the last 5 seconds")
        self._countdown_cb.toggled.connect(self._on_toggle_changed)
        form.addRow("", self._countdown_cb)

        vol_row = QHBoxLayout()
        vol_row.setSpacing(10)
        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        self._vol_slider.setTickInterval(10)
        self._vol_label = QLabel("70%")
        self._vol_label.setMinimumWidth(36)
        self._vol_slider.valueChanged.connect(self._on_volume_changed)
        self._vol_slider.sliderReleased.connect(self._on_volume_released)
        vol_row.addWidget(self._vol_slider)
        vol_row.addWidget(self._vol_label)

        vol_wrapper = QWidget()
        vol_wrapper.setLayout(vol_row)
        form.addRow("Volume:", vol_wrapper)
        root.addLayout(form)

        root.addStretch()
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        close_btn = QPushButton("Close")
        close_btn.setObjectName("secondaryButton")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE / SAVE
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        s = self._settings
        for widget in (self._sound_cb, self._countdown_cb, self._vol_slider):
            widget.blockSignals(True)
        self._sound_cb.setChecked(s.sound_enabled)
        self._countdown_cb.setChecked(s.countdown_cues)
        self._vol_slider.setValue(s.sound_volume)
        self._vol_label.setText(f"{s.sound_volume}%")
        for widget in (self._sound_cb, self._countdown_cb, self._vol_slider):
            widget.blockSignals(False)
        self._countdown_cb.setEnabled(s.sound_enabled)

    def _on_toggle_changed(self) -> None:
        self._settings.sound_enabled = self._sound_cb.isChecked()
        self._settings.countdown_cues = self._countdown_cb.isChecked()
        self._countdown_cb.setEnabled(self._settings.sound_enabled)
        self._save()

    def _on_volume_changed(self, value: int) -> None:
        self._vol_label.setText(f"{value}%")
        self._settings.sound_volume = value
        self._save()

    def _on_volume_released(self) -> None:
        """Play a sample cue when the user releases the volume slider."""
        if self._sound_preview:
            self._sound_preview()

    def _save(self) -> None:
        save_settings(self._settings)

    @property
    def settings(self) -> Settings:
        return self._settings
