"""Qt host for :class:`PhaseTimer`.

Owns the one-second ``QTimer`` tick source and re-broadcasts the core's
updates as Qt signals.  The tick source runs exactly while the core
reports ``is_running``; everything else is the core's business.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .engine import (
    PhaseTimer,
    TimerState,
    PhaseChange,
    DEFAULT_WORK_DURATION,
    DEFAULT_BREAK_DURATION,
)


logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class TimerDriver(QObject):
    """Drives a :class:`PhaseTimer` from the Qt event loop.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted after every core update (ticks and commands).
    state_changed(new_state: TimerState)
        Emitted when the phase changes.
    phase_changed(change: PhaseChange)
        Emitted when a work/break boundary is crossed.
    sessions_changed(count: int)
        Emitted when a full cycle completes.
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    phase_changed = pyqtSignal(object)
    sessions_changed = pyqtSignal(int)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        work_duration: int = DEFAULT_WORK_DURATION,
        break_duration: int = DEFAULT_BREAK_DURATION,
        notifier: Callable[[PhaseChange], None] | None = None,
    ) -> None:
        super().__init__(parent)
        self._notifier = notifier

        self._timer = PhaseTimer(
            work_duration,
            break_duration,
            notifier=self._on_phase_change,
            on_update=self._on_update,
        )
        self._last_state: TimerState = self._timer.phase
        self._last_sessions: int = 0

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._timer.tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def timer(self) -> PhaseTimer:
        return self._timer

    @property
    def state(self) -> TimerState:
        return self._timer.phase

    @property
    def remaining(self) -> int:
        return self._timer.remaining

    @property
    def is_running(self) -> bool:
        return self._timer.is_running

    @property
    def ticking(self) -> bool:
        """True while the tick source is active."""
        return self._qt_timer.isActive()

    @property
    def sessions_completed(self) -> int:
        return self._timer.sessions_completed

    @property
    def progress_fraction(self) -> float:
        return self._timer.progress_fraction

    @property
    def display_time(self) -> str:
        return self._timer.display_time

    def set_notifier(self, notifier: Callable[[PhaseChange], None] | None) -> None:
        self._notifier = notifier

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        self._timer.start()

    def pause(self) -> None:
        self._timer.pause()

    def reset(self) -> None:
        self._timer.reset()

    def toggle(self) -> None:
        """Pause when running, otherwise start or resume."""
        if self._timer.is_running:
            self._timer.pause()
        else:
            self._timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _on_phase_change(self, change: PhaseChange) -> None:
        self.phase_changed.emit(change)
        if self._notifier is not None:
            self._notifier(change)

    def _on_update(self, timer: PhaseTimer) -> None:
        self._sync_tick_source()

        if timer.phase != self._last_state:
            self._last_state = timer.phase
            self.state_changed.emit(timer.phase)
        if timer.sessions_completed != self._last_sessions:
            self._last_sessions = timer.sessions_completed
            self.sessions_changed.emit(timer.sessions_completed)
        self.tick.emit(timer.remaining)

    def _sync_tick_source(self) -> None:
        if self._timer.is_running:
            if not self._qt_timer.isActive():
                self._qt_timer.start()
        elif self._qt_timer.isActive():
            self._qt_timer.stop()
            logger.debug("Tick source stopped (%s)", self._timer.phase.value)
