"""TreadPro: treadmill interval workouts with audio cues."""

__version__ = "0.1.0"
