"""Audio package."""

from .sounds import CueNotifier, CUE_NAMES

__all__ = ["CueNotifier", "CUE_NAMES"]
