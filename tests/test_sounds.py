"""Tests for settings and the phase-change sound notifier.

Covers:
- Settings dataclass defaults and JSON persistence
- WAV synthesis for both cues
- SoundManager volume/enable API and notify() mapping
- Failure paths that must stay quiet
"""

from __future__ import annotations

import io
import json
import wave

import pytest

from eyebreak import settings as settings_mod
from eyebreak.settings import Settings, load_settings, save_settings
from eyebreak.audio.sounds import (
    SoundManager,
    SOUND_NAMES,
    TRANSITION_SOUNDS,
    _generate_bell,
    _generate_chime,
    _make_envelope,
)
from eyebreak.timer.engine import PhaseChange


# ═══════════════════════════════════════════════════════════════════════
#  SETTINGS
# ═══════════════════════════════════════════════════════════════════════


class TestSettingsDefaults:
    def test_durations(self):
        s = Settings()
        assert s.work_duration == 20 * 60
        assert s.break_duration == 20

    def test_sound(self):
        s = Settings()
        assert s.sound_enabled is True
        assert s.sound_volume == 30

    def test_window(self):
        s = Settings()
        assert s.window_x is None
        assert s.window_y is None
        assert s.always_on_top is False


class TestSettingsPersistence:
    def test_round_trip(self):
        original = Settings(work_duration=25 * 60, break_duration=30, sound_volume=42)
        save_settings(original)
        loaded = load_settings()
        assert loaded.work_duration == 25 * 60
        assert loaded.break_duration == 30
        assert loaded.sound_volume == 42

    def test_save_creates_directory(self, app_support_dir):
        save_settings(Settings())
        assert (app_support_dir / "settings.json").exists()

    def test_missing_file_returns_defaults(self):
        assert load_settings() == Settings()

    def test_invalid_json_returns_defaults(self, caplog):
        path = settings_mod.SETTINGS_PATH
        path.parent.mkdir(parents=True)
        path.write_text("NOT VALID JSON", encoding="utf-8")
        assert load_settings() == Settings()
        assert "unreadable settings" in caplog.text

    def test_extra_keys_ignored(self):
        path = settings_mod.SETTINGS_PATH
        path.parent.mkdir(parents=True)
        data = {"work_duration": 1500, "unknown_future_key": True}
        path.write_text(json.dumps(data), encoding="utf-8")
        s = load_settings()
        assert s.work_duration == 1500
        assert not hasattr(s, "unknown_future_key")

    @pytest.mark.parametrize("bad", [0, -20, "twenty"])
    def test_bad_durations_fall_back(self, bad):
        path = settings_mod.SETTINGS_PATH
        path.parent.mkdir(parents=True)
        path.write_text(
            json.dumps({"work_duration": bad, "break_duration": bad}),
            encoding="utf-8",
        )
        s = load_settings()
        assert s.work_duration == 20 * 60
        assert s.break_duration == 20


# ═══════════════════════════════════════════════════════════════════════
#  SOUND SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════


class TestSoundGeneration:

    @pytest.mark.parametrize("gen_fn", [_generate_bell, _generate_chime])
    def test_wav_is_parseable(self, gen_fn):
        data = gen_fn()
        assert data[:4] == b"RIFF"
        with wave.open(io.BytesIO(data), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == 44100
            assert wf.getnframes() > 0

    def test_envelope_shape(self):
        env = _make_envelope(1000, attack=100, decay=100,
                             sustain_level=0.5, release=200)
        assert len(env) == 1000
        assert env[0] == 0.0
        assert env[99] == pytest.approx(1.0)
        assert env[500] == pytest.approx(0.5)
        assert env[-1] == pytest.approx(0.0)
        assert env.max() <= 1.0

    def test_envelope_shorter_than_attack(self):
        env = _make_envelope(50, attack=200)
        assert len(env) == 50


# ═══════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════


class FakeEffect:
    """Stands in for QSoundEffect to observe play() calls."""

    def __init__(self, fail=False):
        self.plays = 0
        self.fail = fail

    def status(self):
        from PyQt6.QtMultimedia import QSoundEffect
        return QSoundEffect.Status.Ready

    def play(self):
        if self.fail:
            raise RuntimeError("device busy")
        self.plays += 1

    def setVolume(self, volume):
        pass


@pytest.mark.usefixtures("qapp")
class TestSoundManager:
    def test_wav_files_generated(self, tmp_path):
        SoundManager(parent=None, sounds_dir=tmp_path)
        for name in SOUND_NAMES:
            path = tmp_path / f"{name}.wav"
            assert path.exists(), f"Missing WAV: {name}"
            assert path.stat().st_size > 100

    def test_default_cache_dir(self, app_support_dir):
        SoundManager(parent=None)
        assert (app_support_dir / "sounds" / "break_start.wav").exists()

    def test_all_sounds_loaded(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        assert set(mgr._effects) == set(SOUND_NAMES)

    def test_default_volume(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        assert mgr.volume == 30

    @pytest.mark.parametrize("level, expected", [(55, 55), (200, 100), (-10, 0)])
    def test_set_volume_clamps(self, tmp_path, level, expected):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.set_volume(level)
        assert mgr.volume == expected

    def test_transition_mapping(self):
        assert TRANSITION_SOUNDS[PhaseChange.TO_BREAK] == "break_start"
        assert TRANSITION_SOUNDS[PhaseChange.TO_WORK] == "work_start"

    def test_notify_plays_matching_cue(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        fakes = {name: FakeEffect() for name in SOUND_NAMES}
        mgr._effects = fakes
        mgr.notify(PhaseChange.TO_BREAK)
        mgr.notify(PhaseChange.TO_WORK)
        mgr.notify(PhaseChange.TO_WORK)
        assert fakes["break_start"].plays == 1
        assert fakes["work_start"].plays == 2

    def test_disabled_plays_nothing(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        fake = FakeEffect()
        mgr._effects = {"break_start": fake}
        mgr.set_enabled(False)
        mgr.notify(PhaseChange.TO_BREAK)
        assert fake.plays == 0
        assert mgr.enabled is False

    def test_playback_failure_is_swallowed(self, tmp_path, caplog):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr._effects = {"break_start": FakeEffect(fail=True)}
        mgr.notify(PhaseChange.TO_BREAK)  # should not raise
        assert "Playback of 'break_start' failed" in caplog.text

    def test_unknown_name_is_noop(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.play("nonexistent_sound")

    def test_unwritable_cache_dir(self, tmp_path, caplog):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        mgr = SoundManager(parent=None, sounds_dir=blocker / "sounds")
        assert mgr._effects == {}
        assert "Sound cache unavailable" in caplog.text
        mgr.notify(PhaseChange.TO_WORK)
