"""Workout package."""

from .models import (
    Segment,
    Session,
    MIN_SEGMENTS,
    MAX_SPEED,
    MAX_INCLINE,
    SPEED_STEP,
    clamp_speed,
    clamp_incline,
    clamp_duration,
)
from .catalog import DEFAULT_SESSIONS, get_session, new_custom_session

__all__ = [
    "Segment",
    "Session",
    "MIN_SEGMENTS",
    "MAX_SPEED",
    "MAX_INCLINE",
    "SPEED_STEP",
    "clamp_speed",
    "clamp_incline",
    "clamp_duration",
    "DEFAULT_SESSIONS",
    "get_session",
    "new_custom_session",
]
