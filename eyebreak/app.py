"""Main application window for EyeBreak."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QIcon, QImage, QPainter, QColor, QPen, QPixmap, QKeySequence
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QStatusBar,
    QSystemTrayIcon, QMenu,
)

from .timer.driver import TimerDriver
from .timer.engine import TimerState, PhaseChange
from .ui.timer_widget import TimerWidget
from .ui.stats_widget import StatsWidget
from .ui.styles import STATE_COLORS, build_stylesheet
from .settings import Settings, load_settings, save_settings
from .audio.sounds import SoundManager


logger = logging.getLogger(__name__)

STATUS_MESSAGES: dict[TimerState, str] = {
    TimerState.STOPPED:  "Ready to start",
    TimerState.WORKING:  "Focus on your work, break reminder coming soon",
    TimerState.ON_BREAK: "Look at something 20 feet away",
    TimerState.PAUSED:   "Paused",
}


# ── tray-icon image generation ────────────────────────────────────────────


def _make_tray_icon(state: TimerState) -> QIcon:
    """32×32 icon: filled disc while running, outline otherwise."""
    size = 64  # draw at 2× for Retina
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(STATE_COLORS[state][0])
    cx, cy, r = size // 2, size // 2, size // 2 - 4

    if state in (TimerState.WORKING, TimerState.ON_BREAK):
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
    else:
        p.setPen(QPen(colour, 4))
        p.setBrush(Qt.BrushStyle.NoBrush)
    p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
    p.end()

    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


class EyeBreakApp(QMainWindow):
    """Main application window."""

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("EyeBreak")
        self.setMinimumSize(400, 560)

        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()

        # ── sound + timer ─────────────────────────────────────────────
        self._sound_manager = SoundManager(parent=self)
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(self._settings.sound_enabled)

        self._driver = TimerDriver(
            self,
            work_duration=self._settings.work_duration,
            break_duration=self._settings.break_duration,
            notifier=self._sound_manager.notify,
        )

        self.setStyleSheet(build_stylesheet())

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(12)

        self._timer_widget = TimerWidget(self._driver, central)
        layout.addWidget(self._timer_widget)

        self._stats_widget = StatsWidget(central)
        layout.addWidget(self._stats_widget)
        layout.addStretch()

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage(STATUS_MESSAGES[TimerState.STOPPED])

        # ── system tray icon ──────────────────────────────────────────
        self._tray_icon = QSystemTrayIcon(self)
        self._tray_icon.setIcon(_make_tray_icon(TimerState.STOPPED))
        self._tray_icon.setToolTip("EyeBreak \u2014 Ready")
        self._tray_icon.activated.connect(self._on_tray_activated)
        self._build_tray_menu()
        self._tray_icon.show()

        self._build_menu_bar()

        # ── wire signals ──────────────────────────────────────────────
        self._driver.state_changed.connect(self._on_state_changed)
        self._driver.phase_changed.connect(self._on_phase_changed)
        self._driver.sessions_changed.connect(self._stats_widget.set_sessions)
        self._driver.tick.connect(self._on_tick)

        # ── restore window state ───────────────────────────────────────
        self._restore_geometry()
        if self._settings.always_on_top:
            self._apply_always_on_top(True)

    @property
    def driver(self) -> TimerDriver:
        return self._driver

    # ══════════════════════════════════════════════════════════════════
    #  SYSTEM TRAY
    # ══════════════════════════════════════════════════════════════════

    def _build_tray_menu(self) -> None:
        menu = QMenu(self)

        self._tray_start_action = menu.addAction("Start")
        self._tray_start_action.triggered.connect(self._driver.toggle)

        reset_action = menu.addAction("Reset")
        reset_action.triggered.connect(self._driver.reset)

        menu.addSeparator()

        show_action = menu.addAction("Show EyeBreak")
        show_action.triggered.connect(self._show_window)

        quit_action = menu.addAction("Quit")
        quit_action.triggered.connect(self._quit_app)

        self._tray_icon.setContextMenu(menu)

    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self._show_window()

    def _show_window(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()

    def _quit_app(self) -> None:
        self._save_geometry()
        self._tray_icon.hide()
        QApplication.instance().quit()

    def _update_tray_state(self, state: TimerState) -> None:
        self._tray_icon.setIcon(_make_tray_icon(state))
        if state == TimerState.STOPPED:
            self._tray_start_action.setText("Start")
        elif state == TimerState.PAUSED:
            self._tray_start_action.setText("Resume")
        else:
            self._tray_start_action.setText("Pause")

    # ══════════════════════════════════════════════════════════════════
    #  MENU BAR
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        timer_menu = menu_bar.addMenu("Timer")

        toggle_action = QAction("Start / Pause", self)
        toggle_action.triggered.connect(self._driver.toggle)
        timer_menu.addAction(toggle_action)

        reset_action = QAction("Reset", self)
        reset_action.setShortcut(QKeySequence("Ctrl+R"))
        reset_action.triggered.connect(self._driver.reset)
        timer_menu.addAction(reset_action)

        timer_menu.addSeparator()

        quit_action = QAction("Quit EyeBreak", self)
        quit_action.setMenuRole(QAction.MenuRole.QuitRole)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self._quit_app)
        timer_menu.addAction(quit_action)

        view_menu = menu_bar.addMenu("View")
        self._aot_action = QAction("Always on Top", self)
        self._aot_action.setCheckable(True)
        self._aot_action.setChecked(self._settings.always_on_top)
        self._aot_action.triggered.connect(self._toggle_always_on_top)
        view_menu.addAction(self._aot_action)

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_state_changed(self, state: TimerState) -> None:
        self._status_bar.showMessage(STATUS_MESSAGES[state])
        self._update_tray_state(state)

    def _on_phase_changed(self, change: PhaseChange) -> None:
        if not self._settings.notifications_enabled:
            return
        if change == PhaseChange.TO_BREAK:
            self._tray_icon.showMessage(
                "Break time!",
                f"Look at something 20 feet away for "
                f"{self._driver.timer.break_duration} seconds.",
            )
        else:
            self._tray_icon.showMessage(
                "Back to work", "Next break in "
                f"{self._driver.timer.work_duration // 60} minutes.",
            )

    def _on_tick(self, remaining: int) -> None:
        state = self._driver.state
        if state == TimerState.WORKING:
            self._tray_icon.setToolTip(
                f"EyeBreak \u2014 Working {self._driver.display_time}"
            )
        elif state == TimerState.ON_BREAK:
            self._tray_icon.setToolTip(
                f"EyeBreak \u2014 Break {self._driver.display_time}"
            )

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        try:
            save_settings(self._settings)
        except OSError as exc:
            logger.warning("Could not save window geometry: %s", exc)

    def _schedule_geometry_save(self) -> None:
        if hasattr(self, "_geometry_save_timer"):
            self._geometry_save_timer.start()

    def _toggle_always_on_top(self) -> None:
        new_val = not self._settings.always_on_top
        self._settings.always_on_top = new_val
        self._aot_action.setChecked(new_val)
        self._apply_always_on_top(new_val)
        self._schedule_geometry_save()

    def _apply_always_on_top(self, on_top: bool) -> None:
        flags = self.windowFlags()
        if on_top:
            flags |= Qt.WindowType.WindowStaysOnTopHint
        else:
            flags &= ~Qt.WindowType.WindowStaysOnTopHint
        self.setWindowFlags(flags)
        self.show()  # setWindowFlags hides the window

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD
    # ══════════════════════════════════════════════════════════════════

    def _on_space(self) -> None:
        self._driver.toggle()

    def _on_escape(self) -> None:
        if self._driver.state != TimerState.STOPPED:
            self._driver.reset()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._save_geometry()
        if self._settings.minimize_to_tray and self._tray_icon.isVisible():
            event.ignore()
            self.hide()
        else:
            self._tray_icon.hide()
            event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._on_space()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._on_escape()
            event.accept()
            return
        super().keyPressEvent(event)
