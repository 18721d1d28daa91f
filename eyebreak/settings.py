"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/EyeBreak/settings.json

Phase durations are read once at startup; nothing in the UI edits them.

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "EyeBreak"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    work_duration: int = 20 * 60           # seconds
    break_duration: int = 20

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 30                 # 0-100

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True

    # ── window ────────────────────────────────────────────────────────
    minimize_to_tray: bool = False
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 440
    window_height: int = 620
    always_on_top: bool = False


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        settings = Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings at %s: %s",
                       SETTINGS_PATH, exc)
        return Settings()

    # Durations must stay positive for the timer to accept them
    defaults = Settings()
    if not isinstance(settings.work_duration, int) or settings.work_duration <= 0:
        logger.warning("Invalid work_duration %r, using default",
                       settings.work_duration)
        settings.work_duration = defaults.work_duration
    if not isinstance(settings.break_duration, int) or settings.break_duration <= 0:
        logger.warning("Invalid break_duration %r, using default",
                       settings.break_duration)
        settings.break_duration = defaults.break_duration
    return settings


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
