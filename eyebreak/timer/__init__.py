"""Timer package."""

from .engine import (
    PhaseTimer,
    TimerState,
    PhaseChange,
    DEFAULT_WORK_DURATION,
    DEFAULT_BREAK_DURATION,
    format_time,
)
from .driver import TimerDriver

__all__ = [
    "PhaseTimer",
    "TimerState",
    "PhaseChange",
    "DEFAULT_WORK_DURATION",
    "DEFAULT_BREAK_DURATION",
    "format_time",
    "TimerDriver",
]
