"""Pure run-state machine for a workout.

Every function here takes the current ``RunState`` (plus the session where
segment data is needed) and returns a *new* state together with the
events the transition produced.  Nothing is mutated and nothing talks to
Qt, so the whole machine can be exercised one logical second at a time.

Phases
------
RUNNING     Counting down the current segment.
PAUSED      Frozen; ticks are ignored.
FINISHED    Last segment exhausted (or skipped).  Terminal.
CANCELLED   User stopped the run.  Terminal, no completion event.

Transitions
-----------
RUNNING → PAUSED                 (pause)
PAUSED → RUNNING                 (resume)
RUNNING → FINISHED               (tick on the last second / skip on last)
PAUSED → FINISHED                (skip on last segment)
RUNNING | PAUSED → CANCELLED     (cancel)

Countdown cues
--------------
A tick that decrements ``segment_seconds_left`` from a value ``<= 6``
emits ``COUNTDOWN_CUE``, i.e. audibly at 5, 4, 3, 2 and 1 seconds left.
The tick that consumes the final second emits ``SEGMENT_END_CUE`` instead.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ..workout.models import Segment, Session


COUNTDOWN_FROM = 6      # prior value at or below which a decrement beeps
ALARM_SECONDS = 5       # display alarm window


class RunPhase(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"
    CANCELLED = "cancelled"


class RunEvent(Enum):
    COUNTDOWN_CUE = "countdown_cue"
    SEGMENT_END_CUE = "segment_end_cue"
    SEGMENT_CHANGED = "segment_changed"
    FINISHED = "finished"


TERMINAL_PHASES = frozenset({RunPhase.FINISHED, RunPhase.CANCELLED})

Events = tuple[RunEvent, ...]


@dataclass(frozen=True)
class RunState:
    segment_index: int
    segment_seconds_left: int
    total_seconds_elapsed: int = 0
    phase: RunPhase = RunPhase.RUNNING

    @property
    def running(self) -> bool:
        return self.phase is RunPhase.RUNNING

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES


# ── lifecycle ─────────────────────────────────────────────────────────────


def start_run(session: Session) -> RunState:
    """Fresh state positioned at the start of the first segment."""
    if not session.segments:
        raise ValueError("cannot start a session without segments")
    return RunState(
        segment_index=0,
        segment_seconds_left=session.segments[0].duration,
    )


def tick(state: RunState, session: Session) -> tuple[RunState, Events]:
    """Advance one logical second.  No-op unless RUNNING."""
    if not state.running:
        return state, ()

    elapsed = state.total_seconds_elapsed + 1
    left = state.segment_seconds_left

    if left > 1:
        events: Events = (RunEvent.COUNTDOWN_CUE,) if left <= COUNTDOWN_FROM else ()
        return replace(
            state, segment_seconds_left=left - 1, total_seconds_elapsed=elapsed,
        ), events

    # Last second of the segment
    if has_next_segment(state, session):
        nxt = state.segment_index + 1
        return replace(
            state,
            segment_index=nxt,
            segment_seconds_left=session.segments[nxt].duration,
            total_seconds_elapsed=elapsed,
        ), (RunEvent.SEGMENT_END_CUE, RunEvent.SEGMENT_CHANGED)

    return replace(
        state,
        segment_seconds_left=0,
        total_seconds_elapsed=elapsed,
        phase=RunPhase.FINISHED,
    ), (RunEvent.FINISHED,)


def skip(state: RunState, session: Session) -> tuple[RunState, Events]:
    """Jump to the next segment, crediting the skipped remainder as elapsed.

    Skipping the last segment finishes the run exactly as if it had been
    ticked down.  The RUNNING/PAUSED phase is otherwise preserved.
    """
    if state.is_terminal:
        return state, ()

    elapsed = state.total_seconds_elapsed + state.segment_seconds_left

    if has_next_segment(state, session):
        nxt = state.segment_index + 1
        return replace(
            state,
            segment_index=nxt,
            segment_seconds_left=session.segments[nxt].duration,
            total_seconds_elapsed=elapsed,
        ), (RunEvent.SEGMENT_CHANGED,)

    return replace(
        state,
        segment_seconds_left=0,
        total_seconds_elapsed=elapsed,
        phase=RunPhase.FINISHED,
    ), (RunEvent.FINISHED,)


def pause(state: RunState) -> RunState:
    if state.phase is not RunPhase.RUNNING:
        return state
    return replace(state, phase=RunPhase.PAUSED)


def resume(state: RunState) -> RunState:
    if state.phase is not RunPhase.PAUSED:
        return state
    return replace(state, phase=RunPhase.RUNNING)


def cancel(state: RunState) -> RunState:
    if state.is_terminal:
        return state
    return replace(state, phase=RunPhase.CANCELLED)


# ── derived queries ───────────────────────────────────────────────────────


def total_duration(session: Session) -> int:
    return session.total_duration


def total_seconds_left(state: RunState, session: Session) -> int:
    return session.total_duration - state.total_seconds_elapsed


def current_segment(state: RunState, session: Session) -> Segment:
    return session.segments[state.segment_index]


def has_next_segment(state: RunState, session: Session) -> bool:
    return state.segment_index < len(session.segments) - 1


def next_segment(state: RunState, session: Session) -> Segment | None:
    if not has_next_segment(state, session):
        return None
    return session.segments[state.segment_index + 1]


def is_alarming(state: RunState) -> bool:
    """True during the last few seconds of a segment."""
    return 0 < state.segment_seconds_left <= ALARM_SECONDS


def segment_progress(state: RunState, session: Session) -> float:
    """0.0 → 1.0 through the current segment."""
    duration = current_segment(state, session).duration
    done = duration - state.segment_seconds_left
    return max(0.0, min(1.0, done / duration))


def session_progress(state: RunState, session: Session) -> float:
    """0.0 → 1.0 through the whole session."""
    total = session.total_duration
    return max(0.0, min(1.0, state.total_seconds_elapsed / total))
