"""Shared pytest fixtures for TreadPro tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from treadpro.audio.sounds import CueNotifier
from treadpro.timer.engine import WorkoutEngine
from treadpro.workout.models import Session, Segment


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real settings file."""
    monkeypatch.setattr("treadpro.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("treadpro.settings.SETTINGS_PATH", tmp_path / "settings.json")
    yield


@pytest.fixture
def two_segment_session():
    """3 s at 5 km/h, then 2 s at 6 km/h and 2 %."""
    return Session(
        name="Short",
        segments=(
            Segment(duration=3, speed=5.0, incline=0),
            Segment(duration=2, speed=6.0, incline=2),
        ),
    )


@pytest.fixture
def long_session():
    return Session(
        name="Long",
        segments=(
            Segment(duration=10, speed=4.0),
            Segment(duration=8, speed=8.5, incline=3),
            Segment(duration=12, speed=6.0, incline=1),
        ),
    )


@pytest.fixture
def engine(qapp):
    """Fresh, not yet started WorkoutEngine."""
    return WorkoutEngine(parent=None)


@pytest.fixture
def cues(qapp, tmp_path):
    """CueNotifier caching its WAVs in a temp dir."""
    return CueNotifier(parent=None, sounds_dir=tmp_path / "sounds")
