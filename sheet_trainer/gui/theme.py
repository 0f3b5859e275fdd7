"""Manuscript theme: dark desk, paper staff.

The staff is drawn on a light "paper" card so the notation reads like
printed music; everything around it stays dark.
"""

from __future__ import annotations

import ctypes
import sys

from PyQt6.QtWidgets import QApplication

# ═══════════════════════════════════════════════════════════════
# Palette
# ═══════════════════════════════════════════════════════════════

# --- Backgrounds ---
BG_DESK = "#14161B"  # main window
BG_PANEL = "#1D2027"  # side and control panels
BG_CARD = "#262A33"  # buttons, combos
BG_HOVER = "#30353F"
PAPER = "#F4EFE3"  # staff card
INK = "#1B1B1F"  # notation on paper

# --- Accents ---
ACCENT = "#C9A227"  # brass
ACCENT_LIGHT = "#DDB945"
ACCENT_DARK = "#A5841C"
SUCCESS = "#4FA36C"
ERROR = "#D0523F"

# --- Text ---
TEXT_PRIMARY = "#ECE8DF"
TEXT_SECONDARY = "#A3A9B5"
TEXT_DISABLED = "#5F6571"

# --- Lines ---
DIVIDER = "#2B303A"
BORDER = "#3C424F"
STAFF_LINE = "#5A5550"

# --- Typography ---
FONT_FAMILY = '"Segoe UI", "Noto Sans", "Noto Sans TC", sans-serif'
MUSIC_FONT = "Noto Music"

# ═══════════════════════════════════════════════════════════════
# Stylesheet
# ═══════════════════════════════════════════════════════════════


def get_stylesheet() -> str:
    """Generate the application stylesheet."""
    return f"""
    QMainWindow, QWidget {{
        background-color: {BG_DESK};
        color: {TEXT_PRIMARY};
        font-family: {FONT_FAMILY};
        font-size: 14px;
    }}

    /* Labels */
    QLabel {{
        background: transparent;
        color: {TEXT_PRIMARY};
    }}
    QLabel[class="secondary"] {{
        color: {TEXT_SECONDARY};
    }}
    QLabel[class="title"] {{
        font-size: 24px;
        font-weight: 700;
    }}
    QLabel[class="feedback-ok"] {{
        color: {SUCCESS};
        font-weight: 600;
    }}
    QLabel[class="feedback-bad"] {{
        color: {ERROR};
        font-weight: 600;
    }}

    /* Buttons */
    QPushButton {{
        background-color: {BG_CARD};
        color: {TEXT_PRIMARY};
        border: 1px solid {BORDER};
        border-radius: 8px;
        padding: 8px 18px;
        font-weight: 600;
    }}
    QPushButton:hover {{
        background-color: {BG_HOVER};
        border-color: {ACCENT};
    }}
    QPushButton:disabled {{
        color: {TEXT_DISABLED};
        border-color: {DIVIDER};
    }}
    QPushButton[class="accent"] {{
        background-color: {ACCENT};
        color: {BG_DESK};
        border: none;
        padding: 10px 24px;
        font-weight: 700;
    }}
    QPushButton[class="accent"]:hover {{
        background-color: {ACCENT_LIGHT};
    }}
    QPushButton[class="accent"]:pressed {{
        background-color: {ACCENT_DARK};
    }}

    /* ComboBox */
    QComboBox {{
        background-color: {BG_CARD};
        border: 1px solid {BORDER};
        border-radius: 6px;
        padding: 6px 10px;
    }}
    QComboBox:hover {{
        border-color: {ACCENT};
    }}
    QComboBox QAbstractItemView {{
        background-color: {BG_CARD};
        selection-background-color: {BG_HOVER};
        selection-color: {ACCENT};
        border: 1px solid {ACCENT};
    }}

    /* CheckBox */
    QCheckBox {{
        spacing: 8px;
    }}
    QCheckBox::indicator {{
        width: 18px;
        height: 18px;
        border: 2px solid {BORDER};
        border-radius: 4px;
        background: {BG_CARD};
    }}
    QCheckBox::indicator:checked {{
        background: {ACCENT};
        border-color: {ACCENT};
    }}

    /* ProgressBar (score) */
    QProgressBar {{
        background-color: {BG_CARD};
        border: none;
        border-radius: 4px;
        height: 8px;
        text-align: center;
    }}
    QProgressBar::chunk {{
        background-color: {SUCCESS};
        border-radius: 4px;
    }}

    /* StatusBar */
    QStatusBar {{
        background-color: {BG_PANEL};
        color: {TEXT_SECONDARY};
        border-top: 1px solid {DIVIDER};
    }}
    """


# ═══════════════════════════════════════════════════════════════
# Platform-specific utilities
# ═══════════════════════════════════════════════════════════════


def enable_dark_title_bar(hwnd: int) -> None:
    """Enable the Windows 10/11 dark title bar via DwmSetWindowAttribute."""
    if sys.platform != "win32":
        return
    try:
        DWMWA_USE_IMMERSIVE_DARK_MODE = 20
        ctypes.windll.dwmapi.DwmSetWindowAttribute(
            hwnd,
            DWMWA_USE_IMMERSIVE_DARK_MODE,
            ctypes.byref(ctypes.c_int(1)),
            4,
        )
    except (AttributeError, OSError):
        pass  # older Windows


def apply_theme(app: QApplication) -> None:
    app.setStyle("Fusion")
    app.setStyleSheet(get_stylesheet())
