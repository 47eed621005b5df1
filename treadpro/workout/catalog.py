"""Built-in workout plans and the custom-session factory."""

from __future__ import annotations

from .models import (
    Session, Segment,
    MIN_SEGMENTS, DEFAULT_SEGMENT_DURATION, DEFAULT_SEGMENT_SPEED,
    _new_id,
)


def _seg(minutes: float, speed: float, incline: int = 0) -> Segment:
    return Segment(duration=int(minutes * 60), speed=speed, incline=incline)


DEFAULT_SESSIONS: tuple[Session, ...] = (
    Session(
        id="walk-20",
        name="Easy Walk",
        description="Twenty relaxed minutes to get the legs moving.",
        segments=(
            _seg(3, 4.5),
            _seg(14, 5.5, 1),
            _seg(3, 4.5),
        ),
    ),
    Session(
        id="intervals-30",
        name="Run Intervals",
        description="Alternate one-minute runs with two-minute walks.",
        segments=(
            _seg(5, 5.0),
            *(
                seg
                for _ in range(6)
                for seg in (_seg(1, 10.0), _seg(2, 5.5))
            ),
            _seg(5, 4.5),
        ),
    ),
    Session(
        id="hills-25",
        name="Hill Climb",
        description="Steady pace with a rising, then falling, incline.",
        segments=(
            _seg(4, 5.0),
            _seg(3, 5.5, 3),
            _seg(3, 5.5, 6),
            _seg(3, 5.5, 9),
            _seg(3, 5.5, 12),
            _seg(3, 5.5, 6),
            _seg(6, 4.5),
        ),
    ),
)

_BY_ID: dict[str, Session] = {s.id: s for s in DEFAULT_SESSIONS}


def get_session(session_id: str) -> Session | None:
    return _BY_ID.get(session_id)


def new_custom_session(name: str = "Custom Session") -> Session:
    """A blank custom plan with the minimum number of editable segments."""
    return Session(
        id=_new_id("custom"),
        name=name,
        description="Set your own speed and incline targets.",
        is_custom=True,
        segments=tuple(
            Segment(duration=DEFAULT_SEGMENT_DURATION, speed=DEFAULT_SEGMENT_SPEED)
            for _ in range(MIN_SEGMENTS)
        ),
    )
