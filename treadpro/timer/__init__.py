"""Timer package."""

from .engine import WorkoutEngine, TICK_INTERVAL_MS
from .transitions import (
    RunState,
    RunPhase,
    RunEvent,
    start_run,
    tick,
    skip,
    pause,
    resume,
    cancel,
    is_alarming,
    COUNTDOWN_FROM,
    ALARM_SECONDS,
)

__all__ = [
    "WorkoutEngine",
    "TICK_INTERVAL_MS",
    "RunState",
    "RunPhase",
    "RunEvent",
    "start_run",
    "tick",
    "skip",
    "pause",
    "resume",
    "cancel",
    "is_alarming",
    "COUNTDOWN_FROM",
    "ALARM_SECONDS",
]
