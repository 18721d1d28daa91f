"""Tests for the Qt host driving PhaseTimer.

Covers: tick-source start/stop by phase, signal emission, notifier
forwarding and toggle behaviour.
"""

import pytest

from eyebreak.timer.driver import TimerDriver, TICK_INTERVAL_MS
from eyebreak.timer.engine import TimerState, PhaseChange

from helpers import SignalCollector, run_ticks


# ═══════════════════════════════════════════════════════════════════════════
#  TICK SOURCE
# ═══════════════════════════════════════════════════════════════════════════


class TestTickSource:

    def test_interval_is_one_second(self, driver):
        assert TICK_INTERVAL_MS == 1000
        assert driver._qt_timer.interval() == 1000

    def test_idle_until_started(self, driver):
        assert driver.ticking is False

    def test_runs_while_working(self, driver):
        driver.start()
        assert driver.ticking is True

    def test_stops_on_pause_and_restarts_on_resume(self, driver):
        driver.start()
        driver.pause()
        assert driver.ticking is False
        driver.start()
        assert driver.ticking is True

    def test_stops_on_reset(self, driver):
        driver.start()
        driver.reset()
        assert driver.ticking is False

    def test_keeps_running_across_phase_flips(self, driver):
        driver.start()
        run_ticks(driver.timer, 5)
        assert driver.state == TimerState.ON_BREAK
        assert driver.ticking is True
        run_ticks(driver.timer, 2)
        assert driver.state == TimerState.WORKING
        assert driver.ticking is True

    def test_timeout_is_wired_to_core_tick(self, driver):
        from PyQt6.QtTest import QTest

        # Pause on the first real tick so only one is consumed
        driver.tick.connect(lambda remaining: remaining == 4 and driver.pause())
        driver._qt_timer.setInterval(1)
        driver.start()
        QTest.qWait(100)
        assert driver.remaining == 4
        assert driver.state == TimerState.PAUSED
        assert driver.ticking is False


# ═══════════════════════════════════════════════════════════════════════════
#  SIGNALS
# ═══════════════════════════════════════════════════════════════════════════


class TestSignals:

    def test_state_changed_on_commands(self, driver):
        c = SignalCollector()
        driver.state_changed.connect(c)
        driver.start()
        driver.pause()
        driver.start()
        driver.reset()
        assert c.items == [
            TimerState.WORKING,
            TimerState.PAUSED,
            TimerState.WORKING,
            TimerState.STOPPED,
        ]

    def test_state_changed_not_emitted_on_plain_ticks(self, driver):
        c = SignalCollector()
        driver.start()
        driver.state_changed.connect(c)
        run_ticks(driver.timer, 3)
        assert len(c) == 0

    def test_tick_signal_carries_remaining(self, driver):
        c = SignalCollector()
        driver.tick.connect(c)
        driver.start()
        run_ticks(driver.timer, 2)
        assert c.items == [5, 4, 3]

    def test_phase_changed_and_sessions_changed(self, driver):
        phases = SignalCollector()
        sessions = SignalCollector()
        driver.phase_changed.connect(phases)
        driver.sessions_changed.connect(sessions)
        driver.start()
        run_ticks(driver.timer, 7)
        assert phases.items == [PhaseChange.TO_BREAK, PhaseChange.TO_WORK]
        assert sessions.items == [1]
        assert driver.sessions_completed == 1

    def test_sessions_changed_not_emitted_on_reset(self, driver):
        sessions = SignalCollector()
        driver.start()
        run_ticks(driver.timer, 7)
        driver.sessions_changed.connect(sessions)
        driver.reset()
        assert len(sessions) == 0
        assert driver.sessions_completed == 1


# ═══════════════════════════════════════════════════════════════════════════
#  NOTIFIER / TOGGLE
# ═══════════════════════════════════════════════════════════════════════════


class TestNotifierForwarding:

    def test_notifier_receives_each_change(self, driver, notes):
        driver.start()
        run_ticks(driver.timer, 7)
        assert notes.changes == [PhaseChange.TO_BREAK, PhaseChange.TO_WORK]

    def test_set_notifier_replaces_collaborator(self, driver, notes):
        other = []
        driver.set_notifier(other.append)
        driver.start()
        run_ticks(driver.timer, 5)
        assert other == [PhaseChange.TO_BREAK]
        assert notes.changes == []

    def test_failing_notifier_keeps_timer_running(self, qapp):
        def boom(change):
            raise OSError("sound backend missing")

        d = TimerDriver(None, work_duration=2, break_duration=1, notifier=boom)
        d.start()
        run_ticks(d.timer, 2)
        assert d.state == TimerState.ON_BREAK
        assert d.ticking is True


class TestToggle:

    def test_toggle_starts_from_stopped(self, driver):
        driver.toggle()
        assert driver.state == TimerState.WORKING

    def test_toggle_pauses_and_resumes(self, driver):
        driver.toggle()
        driver.timer.tick()
        driver.toggle()
        assert driver.state == TimerState.PAUSED
        driver.toggle()
        assert driver.state == TimerState.WORKING
        assert driver.remaining == 4

    def test_toggle_pauses_break(self, driver):
        driver.start()
        run_ticks(driver.timer, 5)
        driver.toggle()
        assert driver.state == TimerState.PAUSED
        assert driver.timer.paused_from == TimerState.ON_BREAK


class TestReadModel:

    def test_mirrors_core(self, driver):
        driver.start()
        run_ticks(driver.timer, 2)
        assert driver.display_time == "00:03"
        assert driver.progress_fraction == pytest.approx(0.4)
        assert driver.is_running is True
