"""UI package."""

from .timer_widget import TimerWidget
from .stats_widget import StatsWidget
from .progress_ring import ProgressRing

__all__ = [
    "TimerWidget",
    "StatsWidget",
    "ProgressRing",
]
