"""QSS stylesheet, palette and phase colours for TreadPro."""

from __future__ import annotations

from ..timer.transitions import RunPhase

# ── palette (slate dark, emerald accent) ────────────────────────────────

PALETTE: dict[str, str] = {
    "bg":           "#0F172A",
    "bg_secondary": "#1E293B",
    "surface":      "#334155",
    "accent":       "#34D399",
    "accent2":      "#6EE7B7",
    "text":         "#F1F5F9",
    "text_muted":   "#94A3B8",
    "speed":        "#60A5FA",
    "incline":      "#FB923C",
    "danger":       "#EF4444",
    "alarm_bg":     "#3B1A24",
    "border":       "#334155",
}

# Countdown colour per run phase.
PHASE_COLORS: dict[RunPhase, str] = {
    RunPhase.RUNNING:   PALETTE["text"],
    RunPhase.PAUSED:    PALETTE["text_muted"],
    RunPhase.FINISHED:  PALETTE["accent"],
    RunPhase.CANCELLED: PALETTE["text_muted"],
}


# ── font resolution ───────────────────────────────────────────────────

_resolved_font: str | None = None


def resolve_font_family() -> str:
    """Detect the best available system font.  Must be called after
    QApplication is created (font database needs the app context)."""
    global _resolved_font
    if _resolved_font is None:
        from PyQt6.QtGui import QFontDatabase
        families = set(QFontDatabase.families())
        for candidate in ("SF Pro", ".AppleSystemUIFont", "Inter"):
            if candidate in families:
                _resolved_font = candidate
                break
        else:
            _resolved_font = "Helvetica Neue"
    return _resolved_font


def fmt_clock(seconds: int) -> str:
    """``MM:SS`` (or ``H:MM:SS`` past an hour)."""
    h, rem = divmod(max(0, seconds), 3600)
    m, s = divmod(rem, 60)
    if h:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"


def fmt_minutes(seconds: int) -> str:
    return f"{seconds // 60} min"


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    font = resolve_font_family()
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "{font}", "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QMainWindow {{
        background-color: {p['bg']};
    }}

    /* ── buttons ─────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 24px;
        font-size: 14px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        border-color: {p['accent']};
    }}

    QPushButton:disabled {{
        color: {p['text_muted']};
        border-color: {p['bg_secondary']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 14px;
        font-weight: 800;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#primaryButton:disabled {{
        background-color: {p['surface']};
        color: {p['text_muted']};
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

    QPushButton#dangerButton {{
        background-color: transparent;
        color: {p['danger']};
        border: 1px solid {p['border']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    QPushButton#dangerButton:hover {{
        background-color: {p['danger']};
        color: {p['bg']};
        border-color: {p['danger']};
    }}

    QPushButton#sessionCard {{
        text-align: left;
        padding: 16px 20px;
        border-radius: 16px;
        font-weight: 500;
    }}

    QPushButton#customCard {{
        background-color: transparent;
        color: {p['text_muted']};
        border: 2px dashed {p['border']};
        border-radius: 16px;
        padding: 22px;
    }}

    QPushButton#customCard:hover {{
        color: {p['accent']};
        border-color: {p['accent']};
    }}

    /* ── spin boxes (segment editor) ─────────────── */
    QSpinBox, QDoubleSpinBox {{
        background-color: {p['bg']};
        border: 1px solid {p['border']};
        border-radius: 6px;
        padding: 4px 6px;
    }}

    QSpinBox:focus, QDoubleSpinBox:focus {{
        border-color: {p['accent']};
    }}

    /* ── scroll area ─────────────────────────────── */
    QScrollArea {{
        border: none;
        background-color: transparent;
    }}

    QScrollBar:vertical {{
        background-color: transparent;
        width: 6px;
    }}

    QScrollBar::handle:vertical {{
        background-color: {p['border']};
        border-radius: 3px;
        min-height: 20px;
    }}

    QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {{
        height: 0px;
    }}

    /* ── frame / card ────────────────────────────── */
    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 16px;
    }}

    QFrame#countdownCard {{
        background-color: {p['bg_secondary']};
        border: 4px solid {p['border']};
        border-radius: 24px;
    }}

    QFrame#countdownCard[alarming="true"] {{
        background-color: {p['alarm_bg']};
        border-color: {p['danger']};
    }}

    QFrame#nextCard {{
        background-color: transparent;
        border: 1px dashed {p['border']};
        border-radius: 12px;
    }}

    /* ── labels ──────────────────────────────────── */
    QLabel#title {{
        font-size: 22px;
        font-weight: 800;
    }}

    QLabel#muted {{
        color: {p['text_muted']};
        font-size: 13px;
    }}

    QLabel#caption {{
        color: {p['text_muted']};
        font-size: 11px;
        font-weight: 700;
    }}

    QLabel#alarmBanner {{
        color: {p['danger']};
        font-weight: 800;
    }}

    QLabel#speedValue {{
        color: {p['speed']};
        font-size: 36px;
        font-weight: 900;
    }}

    QLabel#inclineValue {{
        color: {p['incline']};
        font-size: 36px;
        font-weight: 900;
    }}

    /* ── status bar ──────────────────────────────── */
    QStatusBar {{
        background-color: {p['bg']};
        color: {p['text_muted']};
        font-size: 12px;
        border-top: 1px solid {p['border']};
    }}
    """
