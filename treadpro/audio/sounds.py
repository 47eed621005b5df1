"""Workout cue synthesis and playback using numpy + QSoundEffect.

Cues are generated as mono 16-bit WAV files from sine waves and cached to
disk.  Nothing touches the audio device until ``CueNotifier.unlock()`` is
called from a user gesture (the Start button); until then every cue is a
silent no-op.

Cue names
---------
- ``countdown``    short low beep, once per second in the last 5 seconds
- ``segment_end``  long high beep when the next segment begins
- ``finished``     ascending arpeggio when the whole session is done
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect


logger = logging.getLogger(__name__)

# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "TreadPro"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

CUE_NAMES = (
    "countdown",
    "segment_end",
    "finished",
)

SAMPLE_RATE = 44100
PEAK_GAIN = 0.6


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _decay_envelope(length: int, attack: int = 80, floor: float = 0.1) -> np.ndarray:
    """Short linear attack followed by an exponential fall to *floor*."""
    env = np.geomspace(1.0, floor, length)
    a = min(attack, length)
    if a > 0:
        env[:a] *= np.linspace(0.0, 1.0, a)
    # Fade the tail to zero so playback never ends on a click.
    tail = min(200, length)
    env[-tail:] *= np.linspace(1.0, 0.0, tail)
    return env


def _beep(freq: float, duration_ms: int) -> np.ndarray:
    tone = _sine(freq, duration_ms / 1000) * PEAK_GAIN
    return tone * _decay_envelope(len(tone))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  CUE GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_countdown() -> bytes:
    """A4 (440 Hz), 150 ms.  Short enough to never overlap at 1 Hz."""
    return _to_wav_bytes(_beep(440.0, 150))


def _generate_segment_end() -> bytes:
    """1200 Hz, 500 ms.  Clearly higher and longer than the countdown."""
    return _to_wav_bytes(_beep(1200.0, 500))


def _generate_finished() -> bytes:
    """C5→E5→G5→C6 arpeggio, last note held."""
    notes = [523.25, 659.25, 783.99, 1046.50]
    gap = np.zeros(int(SAMPLE_RATE * 0.02))
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        last = i == len(notes) - 1
        parts.append(_beep(freq, 450 if last else 120))
        if not last:
            parts.append(gap)
    return _to_wav_bytes(np.concatenate(parts))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "countdown": _generate_countdown,
    "segment_end": _generate_segment_end,
    "finished": _generate_finished,
}


# ═══════════════════════════════════════════════════════════════════════════
#  CUE NOTIFIER
# ═══════════════════════════════════════════════════════════════════════════


class CueNotifier(QObject):
    """Plays workout cues.  Silent until ``unlock()``.

    Usage::

        cues = CueNotifier(parent=self)
        start_button.clicked.connect(cues.unlock)
        engine.countdown_cue.connect(cues.on_countdown_cue)
        engine.segment_end_cue.connect(cues.on_segment_end_cue)
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._countdown_enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}
        self._unlocked = False

    # ── public API ────────────────────────────────────────────────────

    def unlock(self) -> None:
        """Open the output device.  Safe to call any number of times."""
        if self._unlocked:
            return
        try:
            self._ensure_wav_files()
        except OSError:
            logger.warning("Could not write cue sounds to %s; cues stay silent",
                           self._sounds_dir, exc_info=True)
            return
        self._load_effects()
        self._unlocked = True
        logger.debug("Audio unlocked with %d cues", len(self._effects))

    def on_countdown_cue(self) -> None:
        if self._countdown_enabled:
            self.play("countdown")

    def on_segment_end_cue(self) -> None:
        self.play("segment_end")

    def on_finished_cue(self) -> None:
        self.play("finished")

    def play(self, name: str) -> None:
        """Play a cue by name.  No-op if locked, disabled or name unknown."""
        if not (self._unlocked and self._enabled):
            return
        effect = self._effects.get(name)
        if effect is not None:
            effect.play()

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def set_countdown_enabled(self, enabled: bool) -> None:
        self._countdown_enabled = enabled

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def countdown_enabled(self) -> bool:
        return self._countdown_enabled

    @property
    def is_unlocked(self) -> bool:
        return self._unlocked

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in CUE_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
