"""Shared test helpers for EyeBreak."""

from eyebreak.timer.engine import PhaseTimer, PhaseChange


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class NotifyRecorder:
    """Notifier stand-in that records every PhaseChange it receives."""

    def __init__(self):
        self.changes: list[PhaseChange] = []

    def __call__(self, change: PhaseChange) -> None:
        self.changes.append(change)

    def count(self, change: PhaseChange) -> int:
        return self.changes.count(change)


def run_ticks(timer, n: int) -> None:
    """Deliver *n* ticks to a PhaseTimer (or anything with ``tick()``)."""
    for _ in range(n):
        timer.tick()


def complete_cycle(timer: PhaseTimer) -> None:
    """Tick through one full work → break → work cycle from WORKING."""
    run_ticks(timer, timer.remaining)
    run_ticks(timer, timer.remaining)
