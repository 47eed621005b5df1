"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/TreadPro/settings.json

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "TreadPro"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100
    countdown_cues: bool = True            # beeps in the last 5 seconds

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 480
    window_height: int = 820


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError):
        logger.warning("Ignoring unreadable settings at %s", SETTINGS_PATH, exc_info=True)
        return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
