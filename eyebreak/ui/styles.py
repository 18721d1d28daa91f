"""QSS stylesheet and state colours for EyeBreak."""

from __future__ import annotations

from ..timer.engine import TimerState

# ── state colors (ring gradient pairs) ──────────────────────────────────
#    Each state maps to (primary, secondary) for the conical gradient.

STATE_COLORS: dict[TimerState, tuple[str, str]] = {
    TimerState.WORKING:  ("#89B4FA", "#74C7EC"),   # screen blue
    TimerState.ON_BREAK: ("#A6E3A1", "#4ECDC4"),   # far-away green
    TimerState.PAUSED:   ("#6C7086", "#585B70"),   # desaturated gray
    TimerState.STOPPED:  ("#4A4A5E", "#3A3A4E"),   # neutral dim
}

PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "surface":      "#2A2A4A",
    "accent":       "#89B4FA",
    "accent2":      "#A6E3A1",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "warning":      "#F9E2AF",
    "danger":       "#F38BA8",
    "border":       "#313154",
}


def build_stylesheet(palette: dict[str, str] = PALETTE) -> str:
    p = palette
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    /* ── buttons ─────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 24px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['surface']};
        border-color: {p['accent']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 12px;
        font-weight: 700;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {p['text_muted']};
        border: 1px solid {p['border']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    QPushButton#secondaryButton:hover {{
        color: {p['text']};
        border-color: {p['text_muted']};
    }}

    /* ── frame / card ────────────────────────────── */
    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 12px;
    }}

    /* ── labels ──────────────────────────────────── */
    QLabel#statusBadge {{
        background-color: {p['surface']};
        color: {p['text']};
        border-radius: 10px;
        padding: 4px 12px;
        font-size: 13px;
        font-weight: 600;
    }}

    QLabel#statValue {{
        font-size: 24px;
        font-weight: 700;
        color: {p['accent']};
    }}

    QLabel#statCaption {{
        font-size: 12px;
        color: {p['text_muted']};
    }}

    /* ── status bar ──────────────────────────────── */
    QStatusBar {{
        background-color: {p['bg']};
        color: {p['text_muted']};
        font-size: 12px;
        border-top: 1px solid {p['border']};
    }}
    """
