"""Derived session stats shown next to the timer.

Each completed cycle credits a fixed number of screen-minutes as "saved"
(the 20 of the 20-20-20 rule).  Nothing here is persisted.
"""

from __future__ import annotations

MINUTES_SAVED_PER_SESSION = 20


def time_saved_minutes(
    sessions_completed: int,
    minutes_per_session: int = MINUTES_SAVED_PER_SESSION,
) -> int:
    return max(0, sessions_completed) * minutes_per_session


def format_time_saved(minutes: int) -> str:
    """``95`` → ``"1h 35m"``."""
    hours, mins = divmod(max(0, minutes), 60)
    return f"{hours}h {mins}m"
