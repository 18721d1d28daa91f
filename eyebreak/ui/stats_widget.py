"""Session stats card: cycles completed and screen time saved."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame

from ..stats import time_saved_minutes, format_time_saved


class StatsWidget(QWidget):
    """Two-column card fed by ``TimerDriver.sessions_changed``."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._sessions = 0

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        row = QHBoxLayout(card)
        row.setContentsMargins(16, 12, 16, 12)
        self._sessions_label = self._add_stat(row, card, "Sessions Completed")
        self._saved_label = self._add_stat(row, card, "Time Saved")

        self.set_sessions(0)

    @staticmethod
    def _add_stat(row: QHBoxLayout, parent: QWidget, caption: str) -> QLabel:
        col = QVBoxLayout()
        col.setAlignment(Qt.AlignmentFlag.AlignCenter)
        value = QLabel(parent)
        value.setObjectName("statValue")
        value.setAlignment(Qt.AlignmentFlag.AlignCenter)
        cap = QLabel(caption, parent)
        cap.setObjectName("statCaption")
        cap.setAlignment(Qt.AlignmentFlag.AlignCenter)
        col.addWidget(value)
        col.addWidget(cap)
        row.addLayout(col)
        return value

    @property
    def sessions(self) -> int:
        return self._sessions

    def set_sessions(self, count: int) -> None:
        self._sessions = count
        self._sessions_label.setText(str(count))
        self._saved_label.setText(format_time_saved(time_saved_minutes(count)))

    def saved_text(self) -> str:
        return self._saved_label.text()
