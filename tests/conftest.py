"""Shared pytest fixtures for EyeBreak tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from eyebreak.timer.driver import TimerDriver
from eyebreak.timer.engine import PhaseTimer

from helpers import NotifyRecorder


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def app_support_dir(tmp_path, monkeypatch):
    """Keep settings and cached sounds out of the real home directory."""
    support = tmp_path / "support"
    monkeypatch.setattr("eyebreak.settings.APP_SUPPORT_DIR", support)
    monkeypatch.setattr("eyebreak.settings.SETTINGS_PATH", support / "settings.json")
    monkeypatch.setattr("eyebreak.audio.sounds.SOUNDS_DIR", support / "sounds")
    return support


@pytest.fixture
def notes():
    return NotifyRecorder()


@pytest.fixture
def timer(notes):
    """Short-phase PhaseTimer (work=5 s, break=2 s) recording notifications."""
    return PhaseTimer(5, 2, notifier=notes)


@pytest.fixture
def default_timer():
    """PhaseTimer with the stock 20 min / 20 s phases."""
    return PhaseTimer()


@pytest.fixture
def driver(qapp, notes):
    """TimerDriver with short phases and a recording notifier."""
    return TimerDriver(None, work_duration=5, break_duration=2, notifier=notes)
