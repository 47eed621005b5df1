"""Workout plan value objects.

A ``Session`` is an ordered tuple of ``Segment``s plus metadata.  Both are
frozen: the editor builds new values with ``with_segment`` / ``add_segment``
/ ``remove_segment`` instead of mutating, so a running engine can never see
its plan change underneath it.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace


# ── authoring limits ──────────────────────────────────────────────────────

MIN_SEGMENTS = 3            # custom sessions need at least this many
MAX_SPEED = 20.0            # km/h
MAX_INCLINE = 15            # %
SPEED_STEP = 0.5            # km/h, editor spin-box step
MAX_SEGMENT_DURATION = 60 * 60

DEFAULT_SEGMENT_DURATION = 3 * 60
DEFAULT_SEGMENT_SPEED = 5.0


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def clamp_speed(speed: float) -> float:
    """Clamp *speed* into ``[0, MAX_SPEED]``, rounded to one decimal."""
    return round(max(0.0, min(float(speed), MAX_SPEED)), 1)


def clamp_incline(incline: int) -> int:
    return max(0, min(int(incline), MAX_INCLINE))


def clamp_duration(seconds: int) -> int:
    """Durations are whole seconds, at least one."""
    return max(1, min(int(seconds), MAX_SEGMENT_DURATION))


@dataclass(frozen=True)
class Segment:
    duration: int                 # seconds
    speed: float = 0.0            # km/h
    incline: int = 0              # %
    id: str = field(default_factory=lambda: _new_id("s"))

    def __post_init__(self) -> None:
        if isinstance(self.duration, bool) or not isinstance(self.duration, int):
            raise TypeError(f"segment duration must be int, got {self.duration!r}")
        if self.duration <= 0:
            raise ValueError(f"segment duration must be positive, got {self.duration}")
        if self.speed < 0 or self.incline < 0:
            raise ValueError("speed and incline must be non-negative")

    @property
    def distance_km(self) -> float:
        return self.speed * self.duration / 3600


@dataclass(frozen=True)
class Session:
    name: str
    segments: tuple[Segment, ...]
    description: str = ""
    is_custom: bool = False
    id: str = field(default_factory=lambda: _new_id("session"))

    def __post_init__(self) -> None:
        # Accept any iterable of segments; always store a tuple.
        object.__setattr__(self, "segments", tuple(self.segments))
        if not self.segments:
            raise ValueError("a session needs at least one segment")

    # ── derived ───────────────────────────────────────────────────────

    @property
    def total_duration(self) -> int:
        """Sum of all segment durations, in seconds."""
        return sum(s.duration for s in self.segments)

    @property
    def total_distance_km(self) -> float:
        return sum(s.distance_km for s in self.segments)

    @property
    def min_segments(self) -> int:
        return MIN_SEGMENTS if self.is_custom else 1

    @property
    def can_start(self) -> bool:
        """True when the session may be handed to the timer engine."""
        return len(self.segments) >= self.min_segments

    # ── authoring ─────────────────────────────────────────────────────

    def with_segment(self, index: int, **changes) -> Session:
        """Return a copy with segment *index* updated.

        ``speed``, ``incline`` and ``duration`` are clamped to the
        authoring limits.
        """
        if "speed" in changes:
            changes["speed"] = clamp_speed(changes["speed"])
        if "incline" in changes:
            changes["incline"] = clamp_incline(changes["incline"])
        if "duration" in changes:
            changes["duration"] = clamp_duration(changes["duration"])
        segments = list(self.segments)
        segments[index] = replace(segments[index], **changes)
        return replace(self, segments=tuple(segments))

    def add_segment(self, segment: Segment | None = None) -> Session:
        """Append *segment* (default: a copy of the last one's targets)."""
        if segment is None:
            last = self.segments[-1]
            segment = Segment(
                duration=last.duration, speed=last.speed, incline=last.incline,
            )
        return replace(self, segments=self.segments + (segment,))

    def remove_segment(self, index: int) -> Session:
        """Drop segment *index*.  Returns ``self`` unchanged at the minimum."""
        if len(self.segments) <= self.min_segments:
            return self
        segments = list(self.segments)
        del segments[index]
        return replace(self, segments=tuple(segments))
