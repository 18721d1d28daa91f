"""Phase-change sounds using numpy synthesis + QSoundEffect.

Both cues are generated as WAV files with sine-wave synthesis and an ADSR
envelope, then cached under the app-support directory.

Sound names
-----------
- ``break_start``: soft bell, time to look away
- ``work_start``: short ascending chime, back to the screen

Playback is fire-and-forget.  Anything that goes wrong (unwritable cache,
missing backend, decode error) is logged and otherwise ignored.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR
from ..timer.engine import PhaseChange


logger = logging.getLogger(__name__)

# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "break_start",
    "work_start",
)

TRANSITION_SOUNDS: dict[PhaseChange, str] = {
    PhaseChange.TO_BREAK: "break_start",
    PhaseChange.TO_WORK: "work_start",
}

SAMPLE_RATE = 44100
DEFAULT_VOLUME = 30


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.full(length, sustain_level, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    r_start = max(length - release, d_end)
    if r_start < length:
        env[r_start:] = np.linspace(env[r_start - 1] if r_start else 0.0,
                                    0.0, length - r_start)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.arange(int(SAMPLE_RATE * duration_s)) / SAMPLE_RATE
    return np.sin(2 * np.pi * freq * t)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """16-bit mono PCM WAV from float samples in -1..1."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_bell() -> bytes:
    """Break start: E5 bell with a fifth overtone, slow decay."""
    duration = 1.2
    tone = _sine(659.25, duration) * 0.4 + _sine(987.77, duration) * 0.1
    env = _make_envelope(
        len(tone),
        attack=int(SAMPLE_RATE * 0.01),
        decay=int(SAMPLE_RATE * 0.25),
        sustain_level=0.3,
        release=int(SAMPLE_RATE * 0.8),
    )
    return _to_wav_bytes(np.concatenate([tone * env, _silence(0.05)]))


def _generate_chime() -> bytes:
    """Work start: two rising notes (G4 → C5)."""
    parts: list[np.ndarray] = []
    for freq, dur in ((392.00, 0.14), (523.25, 0.30)):
        tone = _sine(freq, dur) * 0.5
        env = _make_envelope(len(tone), attack=120, decay=900,
                             sustain_level=0.45, release=2400)
        parts.append(tone * env)
        parts.append(_silence(0.03))
    return _to_wav_bytes(np.concatenate(parts))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "break_start": _generate_bell,
    "work_start": _generate_chime,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Notifier that plays a cue for each phase change.

    Usage::

        sounds = SoundManager(parent=self)
        driver.set_notifier(sounds.notify)
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = DEFAULT_VOLUME / 100.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        try:
            self._ensure_wav_files()
        except OSError as exc:
            logger.warning("Sound cache unavailable at %s: %s",
                           self._sounds_dir, exc)
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def notify(self, change: PhaseChange) -> None:
        """Notifier entry point for :class:`~eyebreak.timer.PhaseTimer`."""
        self.play(TRANSITION_SOUNDS[change])

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if disabled or unavailable."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None:
            logger.debug("No sound loaded for %r", name)
            return
        if effect.status() == QSoundEffect.Status.Error:
            logger.warning("Sound %r failed to load, skipping playback", name)
            return
        try:
            effect.play()
        except Exception:
            logger.warning("Playback of %r failed", name, exc_info=True)

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())

    def _load_effects(self) -> None:
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                continue
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[name] = effect
