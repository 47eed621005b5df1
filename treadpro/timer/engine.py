"""Qt driver for a single workout run.

``WorkoutEngine`` wraps the pure machine in ``transitions`` with a
one-second ``QTimer`` and re-emits each transition event as a Qt signal.
One engine drives exactly one run: build it, call ``start(session)``, and
release it once ``finished`` or ``cancelled`` has fired.

The ``QTimer`` only runs while the run is RUNNING.  It is stopped on pause,
cancel and finish so no tick can land on a discarded run.  Ticks and
commands issued from a slot while another is being dispatched are queued
and run after it, in order; only ``cancel`` cuts in.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..workout.models import Segment, Session
from . import transitions as tr
from .transitions import RunEvent, RunPhase, RunState


logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class WorkoutEngine(QObject):
    """Qt-based workout timer.

    Signals
    -------
    countdown_cue()
        One of the last-seconds beeps before a segment boundary.
    segment_end_cue()
        The current segment ran out and the next one begins.
    segment_changed(new_index: int)
        Emitted on natural advance and on skip.
    finished()
        The run reached its natural end (or the last segment was skipped).
    cancelled()
        The user stopped the run.
    state_changed(new_phase: RunPhase)
        Emitted on every phase transition.
    updated(state: RunState)
        Emitted after any change to the run state (ticks included).
    """

    countdown_cue = pyqtSignal()
    segment_end_cue = pyqtSignal()
    segment_changed = pyqtSignal(int)
    finished = pyqtSignal()
    cancelled = pyqtSignal()
    state_changed = pyqtSignal(object)
    updated = pyqtSignal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._session: Session | None = None
        self._state: RunState | None = None

        # ── command serialization ─────────────────────────────────────
        self._dispatching: bool = False
        self._queue: deque[Callable[[], None]] = deque()

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def run_state(self) -> RunState | None:
        return self._state

    @property
    def phase(self) -> RunPhase | None:
        return self._state.phase if self._state else None

    @property
    def is_running(self) -> bool:
        return self._state is not None and self._state.running

    @property
    def is_active(self) -> bool:
        """True while RUNNING or PAUSED."""
        return self._state is not None and not self._state.is_terminal

    # Before start() the counters read 0 and the segments None.

    @property
    def segment_index(self) -> int:
        return self._state.segment_index if self._state else 0

    @property
    def segment_seconds_left(self) -> int:
        return self._state.segment_seconds_left if self._state else 0

    @property
    def total_seconds_elapsed(self) -> int:
        return self._state.total_seconds_elapsed if self._state else 0

    @property
    def total_duration(self) -> int:
        return self._session.total_duration if self._session else 0

    @property
    def total_seconds_left(self) -> int:
        if self._state is None:
            return 0
        return tr.total_seconds_left(self._state, self._session)

    @property
    def current_segment(self) -> Segment | None:
        if self._state is None:
            return None
        return tr.current_segment(self._state, self._session)

    @property
    def next_segment(self) -> Segment | None:
        if self._state is None:
            return None
        return tr.next_segment(self._state, self._session)

    @property
    def is_alarming(self) -> bool:
        return self._state is not None and tr.is_alarming(self._state)

    @property
    def timer_active(self) -> bool:
        """Whether the underlying QTimer is currently scheduled."""
        return self._qt_timer.isActive()

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, session: Session) -> None:
        """Begin running *session*.  No-op if this engine already ran."""
        if self._state is not None:
            logger.debug("start ignored: engine already used")
            return
        state = tr.start_run(session)
        self._session = session
        self._state = state
        logger.info(
            "Run started: %s (%d segments, %ds)",
            session.name, len(session.segments), session.total_duration,
        )
        self.state_changed.emit(state.phase)
        self.updated.emit(state)
        self._qt_timer.start()

    def pause(self) -> None:
        self._submit(self._pause)

    def resume(self) -> None:
        self._submit(self._resume)

    def toggle_pause(self) -> None:
        self._submit(self._toggle_pause)

    def skip(self) -> None:
        """Jump to the next segment (or finish, on the last one)."""
        self._submit(self._skip)

    def cancel(self) -> None:
        """Stop the run without a completion signal.

        Unlike the other commands this takes effect at once, even from a
        slot: whatever the current dispatch had left to emit is dropped.
        """
        if not self.is_active:
            logger.debug("cancel ignored in phase %s", self.phase)
            return
        self._qt_timer.stop()
        self._queue.clear()
        self._set_state(tr.cancel(self._state))
        logger.info("Run cancelled after %ds", self._state.total_seconds_elapsed)
        self.cancelled.emit()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: command serialization
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        self._submit(self._tick)

    def _submit(self, command: Callable[[], None]) -> None:
        # Commands arriving from a slot mid-dispatch run after it, in order.
        self._queue.append(command)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queue:
                self._queue.popleft()()
        finally:
            self._queue.clear()
            self._dispatching = False

    def _tick(self) -> None:
        if not self.is_running:
            return
        self._apply(*tr.tick(self._state, self._session))

    def _pause(self) -> None:
        if not self.is_running:
            logger.debug("pause ignored in phase %s", self.phase)
            return
        self._qt_timer.stop()
        self._set_state(tr.pause(self._state))

    def _resume(self) -> None:
        if self.phase is not RunPhase.PAUSED:
            logger.debug("resume ignored in phase %s", self.phase)
            return
        self._set_state(tr.resume(self._state))
        self._qt_timer.start()

    def _toggle_pause(self) -> None:
        if self.is_running:
            self._pause()
        else:
            self._resume()

    def _skip(self) -> None:
        if not self.is_active:
            logger.debug("skip ignored in phase %s", self.phase)
            return
        new_state, events = tr.skip(self._state, self._session)
        logger.info(
            "Skipped segment %d with %ds left",
            self._state.segment_index + 1, self._state.segment_seconds_left,
        )
        self._apply(new_state, events)

    def _apply(self, new_state: RunState, events: tr.Events) -> None:
        old_phase = self._state.phase
        if new_state.phase is RunPhase.FINISHED:
            self._qt_timer.stop()
        self._state = new_state
        if new_state.phase is not old_phase:
            self.state_changed.emit(new_state.phase)
        self.updated.emit(new_state)

        for event in events:
            # A slot may have cancelled the run mid-dispatch.
            if self._state is not new_state:
                return
            self._emit(event, new_state)

    def _emit(self, event: RunEvent, state: RunState) -> None:
        if event is RunEvent.COUNTDOWN_CUE:
            self.countdown_cue.emit()
        elif event is RunEvent.SEGMENT_END_CUE:
            self.segment_end_cue.emit()
        elif event is RunEvent.SEGMENT_CHANGED:
            logger.info("Segment %d of %d",
                        state.segment_index + 1, len(self._session.segments))
            self.segment_changed.emit(state.segment_index)
        elif event is RunEvent.FINISHED:
            logger.info("Run finished after %ds", state.total_seconds_elapsed)
            self.finished.emit()

    def _set_state(self, new_state: RunState) -> None:
        self._state = new_state
        self.state_changed.emit(new_state.phase)
        self.updated.emit(new_state)
