"""Tests for the pure run-state machine.

Covers: start, tick countdown and cue window, segment transitions,
natural finish, skip (middle and last segment), pause/resume, cancel,
terminal no-ops, and the elapsed-time accounting invariant.
"""

import pytest

from treadpro.timer import transitions as tr
from treadpro.timer.transitions import RunEvent, RunPhase, RunState
from treadpro.workout.models import Session, Segment


def _session(*durations: int) -> Session:
    return Session(
        name="t", segments=tuple(Segment(duration=d, speed=5.0) for d in durations),
    )


def _remaining_plan(state: RunState, session: Session) -> int:
    later = session.segments[state.segment_index + 1:]
    return state.segment_seconds_left + sum(s.duration for s in later)


def _drive(state: RunState, session: Session, n: int):
    """Apply *n* ticks; return final state and every event emitted."""
    events: list[RunEvent] = []
    for _ in range(n):
        state, ev = tr.tick(state, session)
        events.extend(ev)
    return state, events


# ═══════════════════════════════════════════════════════════════════════════
#  START
# ═══════════════════════════════════════════════════════════════════════════


class TestStart:

    def test_initial_state(self, two_segment_session):
        state = tr.start_run(two_segment_session)
        assert state.segment_index == 0
        assert state.segment_seconds_left == 3
        assert state.total_seconds_elapsed == 0
        assert state.running is True
        assert state.phase is RunPhase.RUNNING

    def test_start_does_not_touch_session(self, two_segment_session):
        before = two_segment_session.segments
        tr.start_run(two_segment_session)
        assert two_segment_session.segments == before


# ═══════════════════════════════════════════════════════════════════════════
#  TICK
# ═══════════════════════════════════════════════════════════════════════════


class TestTick:

    def test_decrements_and_counts_elapsed(self):
        s = _session(20)
        state, events = tr.tick(tr.start_run(s), s)
        assert state.segment_seconds_left == 19
        assert state.total_seconds_elapsed == 1
        assert events == ()

    @pytest.mark.parametrize("prior,cue", [
        (20, False), (7, False), (6, True), (5, True),
        (4, True), (3, True), (2, True),
    ])
    def test_countdown_cue_window(self, prior, cue):
        s = _session(30)
        state = RunState(segment_index=0, segment_seconds_left=prior)
        _, events = tr.tick(state, s)
        assert (RunEvent.COUNTDOWN_CUE in events) is cue

    def test_last_second_advances_segment(self):
        s = _session(4, 7)
        state = RunState(segment_index=0, segment_seconds_left=1, total_seconds_elapsed=3)
        state, events = tr.tick(state, s)
        assert events == (RunEvent.SEGMENT_END_CUE, RunEvent.SEGMENT_CHANGED)
        assert state.segment_index == 1
        assert state.segment_seconds_left == 7
        assert state.total_seconds_elapsed == 4
        assert state.running

    def test_last_second_of_last_segment_finishes(self):
        s = _session(4)
        state = RunState(segment_index=0, segment_seconds_left=1, total_seconds_elapsed=3)
        state, events = tr.tick(state, s)
        assert events == (RunEvent.FINISHED,)
        assert state.phase is RunPhase.FINISHED
        assert state.running is False
        assert state.segment_seconds_left == 0
        assert state.total_seconds_elapsed == 4

    def test_tick_while_paused_is_noop(self):
        s = _session(10)
        paused = tr.pause(tr.start_run(s))
        state, events = tr.tick(paused, s)
        assert state is paused
        assert events == ()

    def test_tick_after_finish_is_noop(self):
        s = _session(1)
        done, _ = tr.tick(tr.start_run(s), s)
        again, events = tr.tick(done, s)
        assert again is done
        assert events == ()


# ═══════════════════════════════════════════════════════════════════════════
#  WHOLE-RUN PROPERTIES
# ═══════════════════════════════════════════════════════════════════════════


class TestFullRun:

    @pytest.mark.parametrize("durations", [(1,), (3, 2), (7, 1, 1, 12), (2, 9, 5)])
    def test_exactly_one_finish_on_final_tick(self, durations):
        s = _session(*durations)
        total = sum(durations)
        state = tr.start_run(s)
        for i in range(total):
            state, events = tr.tick(state, s)
            if i < total - 1:
                assert RunEvent.FINISHED not in events
            else:
                assert events.count(RunEvent.FINISHED) == 1
        assert state.total_seconds_elapsed == total
        assert state.phase is RunPhase.FINISHED

    @pytest.mark.parametrize("durations", [(3, 2), (7, 1, 1, 12), (6, 6, 6)])
    def test_accounting_invariant_holds_every_tick(self, durations):
        s = _session(*durations)
        total = sum(durations)
        state = tr.start_run(s)
        while state.running:
            assert state.total_seconds_elapsed + _remaining_plan(state, s) == total
            state, _ = tr.tick(state, s)

    def test_segment_end_cue_once_per_boundary(self):
        s = _session(3, 4, 5)
        _, events = _drive(tr.start_run(s), s, 12)
        assert events.count(RunEvent.SEGMENT_END_CUE) == 2
        assert events.count(RunEvent.SEGMENT_CHANGED) == 2

    def test_countdown_cues_per_long_segment(self):
        """A long segment beeps at 5, 4, 3, 2 and 1 seconds left."""
        s = _session(30, 30)
        _, events = _drive(tr.start_run(s), s, 30)
        assert events.count(RunEvent.COUNTDOWN_CUE) == 5

    def test_concrete_three_plus_two_scenario(self, two_segment_session):
        s = two_segment_session
        state = tr.start_run(s)
        assert (state.segment_index, state.segment_seconds_left) == (0, 3)

        state, ev1 = tr.tick(state, s)
        state, ev2 = tr.tick(state, s)
        assert state.segment_seconds_left == 1
        assert ev1 == (RunEvent.COUNTDOWN_CUE,)
        assert ev2 == (RunEvent.COUNTDOWN_CUE,)

        state, ev3 = tr.tick(state, s)
        assert RunEvent.SEGMENT_END_CUE in ev3
        assert state.segment_index == 1
        assert state.segment_seconds_left == 2
        assert state.total_seconds_elapsed == 3

        state, ev4 = tr.tick(state, s)
        assert RunEvent.FINISHED not in ev4
        state, ev5 = tr.tick(state, s)
        assert ev5 == (RunEvent.FINISHED,)
        assert state.total_seconds_elapsed == 5
        assert state.running is False


# ═══════════════════════════════════════════════════════════════════════════
#  PAUSE / RESUME
# ═══════════════════════════════════════════════════════════════════════════


class TestPauseResume:

    def test_pause_then_resume(self):
        s = _session(10)
        paused = tr.pause(tr.start_run(s))
        assert paused.phase is RunPhase.PAUSED
        assert tr.resume(paused).phase is RunPhase.RUNNING

    def test_pause_resume_pair_does_not_change_progression(self):
        s = _session(5, 4, 6)
        plain, plain_events = _drive(tr.start_run(s), s, 8)

        state, first = _drive(tr.start_run(s), s, 3)
        state = tr.pause(state)
        state, suppressed = _drive(state, s, 50)
        assert suppressed == []
        state = tr.resume(state)
        state, rest = _drive(state, s, 5)

        assert state == plain
        assert first + rest == plain_events

    def test_resume_when_running_is_noop(self):
        s = _session(10)
        state = tr.start_run(s)
        assert tr.resume(state) is state

    def test_pause_when_finished_is_noop(self):
        s = _session(1)
        done, _ = tr.tick(tr.start_run(s), s)
        assert tr.pause(done) is done


# ═══════════════════════════════════════════════════════════════════════════
#  SKIP
# ═══════════════════════════════════════════════════════════════════════════


class TestSkip:

    def test_skip_middle_segment_credits_remainder(self):
        s = _session(10, 7, 3)
        state, _ = _drive(tr.start_run(s), s, 4)
        assert state.segment_seconds_left == 6
        skipped, events = tr.skip(state, s)
        assert events == (RunEvent.SEGMENT_CHANGED,)
        assert skipped.segment_index == 1
        assert skipped.segment_seconds_left == 7
        assert skipped.total_seconds_elapsed == state.total_seconds_elapsed + 6

    def test_skip_keeps_invariant(self):
        s = _session(10, 7, 3)
        state, _ = _drive(tr.start_run(s), s, 4)
        state, _ = tr.skip(state, s)
        assert state.total_seconds_elapsed + _remaining_plan(state, s) == 20

    def test_skip_preserves_paused_phase(self):
        s = _session(10, 7)
        state = tr.pause(tr.start_run(s))
        skipped, _ = tr.skip(state, s)
        assert skipped.phase is RunPhase.PAUSED
        assert skipped.segment_index == 1

    def test_skip_last_segment_finishes(self):
        s = _session(4, 6)
        state, _ = _drive(tr.start_run(s), s, 6)
        assert state.segment_index == 1
        done, events = tr.skip(state, s)
        assert events == (RunEvent.FINISHED,)
        assert done.phase is RunPhase.FINISHED
        assert done.total_seconds_elapsed == 10
        assert done.segment_seconds_left == 0

    def test_skip_after_finish_is_noop(self):
        s = _session(1)
        done, _ = tr.tick(tr.start_run(s), s)
        again, events = tr.skip(done, s)
        assert again is done
        assert events == ()


# ═══════════════════════════════════════════════════════════════════════════
#  CANCEL
# ═══════════════════════════════════════════════════════════════════════════


class TestCancel:

    def test_cancel_from_running_and_paused(self):
        s = _session(10)
        running = tr.start_run(s)
        assert tr.cancel(running).phase is RunPhase.CANCELLED
        assert tr.cancel(tr.pause(running)).phase is RunPhase.CANCELLED

    def test_nothing_happens_after_cancel(self):
        s = _session(2, 2)
        cancelled = tr.cancel(tr.start_run(s))
        assert tr.tick(cancelled, s) == (cancelled, ())
        assert tr.skip(cancelled, s) == (cancelled, ())
        assert tr.resume(cancelled) is cancelled
        assert tr.pause(cancelled) is cancelled

    def test_cancel_after_finish_stays_finished(self):
        s = _session(1)
        done, _ = tr.tick(tr.start_run(s), s)
        assert tr.cancel(done).phase is RunPhase.FINISHED


# ═══════════════════════════════════════════════════════════════════════════
#  DERIVED QUERIES
# ═══════════════════════════════════════════════════════════════════════════


class TestQueries:

    def test_totals(self, two_segment_session):
        s = two_segment_session
        state, _ = _drive(tr.start_run(s), s, 2)
        assert tr.total_duration(s) == 5
        assert tr.total_seconds_left(state, s) == 3

    def test_current_and_next_segment(self, two_segment_session):
        s = two_segment_session
        state = tr.start_run(s)
        assert tr.current_segment(state, s) is s.segments[0]
        assert tr.next_segment(state, s) is s.segments[1]
        last, _ = _drive(state, s, 3)
        assert tr.current_segment(last, s) is s.segments[1]
        assert tr.next_segment(last, s) is None

    @pytest.mark.parametrize("left,alarming", [
        (0, False), (1, True), (5, True), (6, False), (60, False),
    ])
    def test_is_alarming(self, left, alarming):
        assert tr.is_alarming(RunState(0, left)) is alarming

    def test_progress_fractions(self):
        s = _session(10, 10)
        state, _ = _drive(tr.start_run(s), s, 5)
        assert tr.segment_progress(state, s) == pytest.approx(0.5)
        assert tr.session_progress(state, s) == pytest.approx(0.25)
