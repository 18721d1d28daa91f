"""Main timer card.

Layout (top → bottom):
    - Phase title + hint
    - ProgressRing (large, centred)
    - Start/Pause/Resume + Reset buttons
    - Status badge
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
    QSizePolicy,
)

from ..timer.driver import TimerDriver
from ..timer.engine import TimerState
from .progress_ring import ProgressRing


RING_LABELS: dict[TimerState, str] = {
    TimerState.STOPPED:  "READY",
    TimerState.WORKING:  "WORK",
    TimerState.ON_BREAK: "LOOK AWAY",
    TimerState.PAUSED:   "PAUSED",
}

BADGE_TEXT: dict[TimerState, str] = {
    TimerState.STOPPED:  "Ready to start",
    TimerState.WORKING:  "Working",
    TimerState.ON_BREAK: "Break time!",
    TimerState.PAUSED:   "Paused",
}


class TimerWidget(QWidget):
    """Ring, controls and status badge for one :class:`TimerDriver`."""

    def __init__(self, driver: TimerDriver, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._driver = driver
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(driver.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 24)
        layout.setSpacing(12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._title = QLabel(card)
        self._title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._title.setStyleSheet("font-size: 18px; font-weight: 700;")
        layout.addWidget(self._title)

        ring_row = QHBoxLayout()
        ring_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ring = ProgressRing(card)
        self._ring.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self._ring.setFixedSize(300, 300)
        ring_row.addWidget(self._ring)
        layout.addLayout(ring_row)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton("Start Timer", card)
        self._start_pause_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        badge_row = QHBoxLayout()
        badge_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._badge = QLabel(card)
        self._badge.setObjectName("statusBadge")
        badge_row.addWidget(self._badge)
        layout.addLayout(badge_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._driver.toggle)
        self._reset_btn.clicked.connect(self._driver.reset)

        self._driver.tick.connect(self._refresh_display)
        self._driver.state_changed.connect(self._on_state_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_state_changed(self, state: TimerState) -> None:
        if self._driver.is_running:
            self._start_pause_btn.setText("Pause")
        elif state == TimerState.PAUSED:
            self._start_pause_btn.setText("Resume")
        else:
            self._start_pause_btn.setText("Start Timer")

        shown = state
        if state == TimerState.PAUSED and self._driver.timer.paused_from is not None:
            shown = self._driver.timer.paused_from
        self._title.setText("Break Time!" if shown == TimerState.ON_BREAK
                            else "Work Session")

        self._ring.set_state_label(RING_LABELS[state])
        self._ring.apply_state(state)
        self._badge.setText(BADGE_TEXT[state])
        self._refresh_display(self._driver.remaining)

    def _refresh_display(self, remaining: int) -> None:
        self._ring.set_time_text(self._driver.display_time)
        self._ring.set_percent(self._driver.progress_fraction)
