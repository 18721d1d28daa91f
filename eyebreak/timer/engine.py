"""Phase-cycling timer state machine for EyeBreak.

States
------
STOPPED    Not running, clock shows a full work phase.
WORKING    Work phase counting down (20 min by default).
ON_BREAK   Break phase counting down (20 s by default).
PAUSED     Frozen; remembers which phase it interrupted.

Transitions
-----------
STOPPED → WORKING                  (start)
WORKING | ON_BREAK → PAUSED        (pause)
PAUSED → {whatever was paused}     (start)
WORKING → ON_BREAK                 (tick at the boundary, notify TO_BREAK)
ON_BREAK → WORKING                 (tick at the boundary, notify TO_WORK)
Any → STOPPED                      (reset)

The engine owns no clock.  The host calls ``tick()`` once per second while
``is_running`` is true, and every command is a total function: anything
that doesn't apply in the current state is a no-op.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    STOPPED = "stopped"
    WORKING = "working"
    ON_BREAK = "on_break"
    PAUSED = "paused"


class PhaseChange(Enum):
    TO_BREAK = "to_break"
    TO_WORK = "to_work"


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_WORK_DURATION = 20 * 60
DEFAULT_BREAK_DURATION = 20

_ACTIVE_STATES = (TimerState.WORKING, TimerState.ON_BREAK)


def format_time(seconds: int) -> str:
    """``seconds`` as zero-padded MM:SS."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


# ── engine ────────────────────────────────────────────────────────────────


class PhaseTimer:
    """Work/break cycle with an explicit pause memory.

    Parameters
    ----------
    work_duration, break_duration
        Phase lengths in seconds; both must be positive.
    notifier
        Called with a :class:`PhaseChange` each time a phase flips.
    on_update
        Called with the timer after every tick or command that changed
        something, so a display can re-read the read model.
    """

    def __init__(
        self,
        work_duration: int = DEFAULT_WORK_DURATION,
        break_duration: int = DEFAULT_BREAK_DURATION,
        *,
        notifier: Callable[[PhaseChange], None] | None = None,
        on_update: Callable[["PhaseTimer"], None] | None = None,
    ) -> None:
        if work_duration <= 0 or break_duration <= 0:
            raise ValueError(
                f"durations must be positive "
                f"(work={work_duration}, break={break_duration})"
            )
        self._work_duration = int(work_duration)
        self._break_duration = int(break_duration)
        self._notifier = notifier
        self._on_update = on_update

        self._state: TimerState = TimerState.STOPPED
        self._paused_from: TimerState | None = None
        self._remaining: int = self._work_duration
        self._sessions_completed: int = 0
        self._last_fraction: float = 0.0

    # ══════════════════════════════════════════════════════════════════
    #  READ MODEL
    # ══════════════════════════════════════════════════════════════════

    @property
    def phase(self) -> TimerState:
        return self._state

    @property
    def remaining(self) -> int:
        """Seconds left in the current phase."""
        return self._remaining

    @property
    def work_duration(self) -> int:
        return self._work_duration

    @property
    def break_duration(self) -> int:
        return self._break_duration

    @property
    def sessions_completed(self) -> int:
        """Full work → break → work cycles since the timer was created."""
        return self._sessions_completed

    @property
    def paused_from(self) -> TimerState | None:
        return self._paused_from

    @property
    def is_running(self) -> bool:
        """True while the host should be delivering ticks."""
        return self._state in _ACTIVE_STATES

    @property
    def progress_fraction(self) -> float:
        """0.0 → 1.0 through the current phase.

        Frozen at its last value while STOPPED or PAUSED.
        """
        if not self.is_running:
            return self._last_fraction
        total = self.duration_of(self._state)
        elapsed = total - self._remaining
        self._last_fraction = max(0.0, min(1.0, elapsed / total))
        return self._last_fraction

    @property
    def display_time(self) -> str:
        return format_time(self._remaining)

    def duration_of(self, state: TimerState) -> int:
        """Length of *state*'s phase; a pause counts as the phase it froze."""
        if state == TimerState.PAUSED and self._paused_from is not None:
            state = self._paused_from
        if state == TimerState.ON_BREAK:
            return self._break_duration
        return self._work_duration

    # ══════════════════════════════════════════════════════════════════
    #  COMMANDS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start from STOPPED, or resume the phase a pause interrupted."""
        if self._state == TimerState.STOPPED:
            self._remaining = self._work_duration
            self._state = TimerState.WORKING
            logger.info("Timer started (work %s)", self.display_time)
        elif self._state == TimerState.PAUSED and self._paused_from is not None:
            self._state = self._paused_from
            self._paused_from = None
            logger.info("Timer resumed in %s at %s",
                        self._state.value, self.display_time)
        else:
            return
        self._changed()

    def pause(self) -> None:
        """Freeze the running phase.  No-op when STOPPED or PAUSED."""
        if not self.is_running:
            return
        self._refresh_fraction()
        self._paused_from = self._state
        self._state = TimerState.PAUSED
        logger.info("Timer paused in %s at %s",
                    self._paused_from.value, self.display_time)
        self._changed()

    def reset(self) -> None:
        """Back to STOPPED with a full work phase.  Keeps the session count."""
        self._refresh_fraction()
        self._state = TimerState.STOPPED
        self._paused_from = None
        self._remaining = self._work_duration
        logger.info("Timer reset (%d sessions completed)",
                    self._sessions_completed)
        self._changed()

    def tick(self) -> None:
        """Consume one second.  Ignored unless WORKING or ON_BREAK."""
        if not self.is_running:
            return
        if self._remaining > 1:
            self._remaining -= 1
            self._changed()
            return
        self._flip()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _flip(self) -> None:
        if self._state == TimerState.WORKING:
            self._state = TimerState.ON_BREAK
            self._remaining = self._break_duration
            change = PhaseChange.TO_BREAK
        else:
            self._state = TimerState.WORKING
            self._remaining = self._work_duration
            self._sessions_completed += 1
            change = PhaseChange.TO_WORK
        self._last_fraction = 0.0
        logger.info("Phase change %s (sessions=%d)",
                    change.value, self._sessions_completed)
        self._notify(change)
        self._changed()

    def _notify(self, change: PhaseChange) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier(change)
        except Exception:
            logger.exception("Notifier failed for %s", change.value)

    def _refresh_fraction(self) -> None:
        if self.is_running:
            _ = self.progress_fraction

    def _changed(self) -> None:
        if self._on_update is not None:
            self._on_update(self)
