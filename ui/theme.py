# ui/theme.py
from PyQt5.QtCore import QSettings
from PyQt5.QtGui import QColor, QPalette

from sobriety.scoring import SobrietyTier


# -----------------------------
# Settings (persistent)
# -----------------------------
_SETTINGS = QSettings("NoDrunkText", "NoDrunkText")


def load_theme_preference():
    mode = _SETTINGS.value("theme/mode", "light")
    accent = _SETTINGS.value("theme/accent", "blue")
    return str(mode), str(accent)


def save_theme_preference(mode: str, accent: str):
    _SETTINGS.setValue("theme/mode", mode)
    _SETTINGS.setValue("theme/accent", accent)


# -----------------------------
# Accent presets
# -----------------------------
ACCENTS = {
    "blue":   {"ACCENT": "#007AFF", "ACCENT_HOVER": "#3395FF"},
    "purple": {"ACCENT": "#7C3AED", "ACCENT_HOVER": "#8B5CF6"},
    "teal":   {"ACCENT": "#0D9488", "ACCENT_HOVER": "#14B8A6"},
}

# Warning colours used by rating buttons and score labels
CAUTION = "#FF9500"
DANGER = "#FF3B30"
OK = "#34C759"

TIER_COLORS = {
    SobrietyTier.ALERT: OK,
    SobrietyTier.SOMEWHAT_SLOW: CAUTION,
    SobrietyTier.IMPAIRED: DANGER,
}


LIGHT_BASE = {
    "BACKGROUND": "#F2F2F7",
    "SURFACE": "#FFFFFF",
    "TEXT": "#1C1C1E",
    "MUTED": "#8E8E93",
    "BORDER": "#D1D1D6",
}

DARK_BASE = {
    "BACKGROUND": "#000000",
    "SURFACE": "#1C1C1E",
    "TEXT": "#F2F2F7",
    "MUTED": "#98989F",
    "BORDER": "#38383A",
}


def _tokens(mode: str, accent: str):
    t = dict(DARK_BASE if mode == "dark" else LIGHT_BASE)
    t.update(ACCENTS.get(accent, ACCENTS["blue"]))
    return t


def _build_palette(mode: str, accent: str) -> QPalette:
    t = _tokens(mode, accent)

    pal = QPalette()
    pal.setColor(QPalette.Window, QColor(t["BACKGROUND"]))
    pal.setColor(QPalette.Base, QColor(t["SURFACE"]))
    pal.setColor(QPalette.AlternateBase, QColor(t["BACKGROUND"]))
    pal.setColor(QPalette.WindowText, QColor(t["TEXT"]))
    pal.setColor(QPalette.Text, QColor(t["TEXT"]))
    pal.setColor(QPalette.Button, QColor(t["SURFACE"]))
    pal.setColor(QPalette.ButtonText, QColor(t["TEXT"]))
    pal.setColor(QPalette.Highlight, QColor(t["ACCENT"]))
    pal.setColor(QPalette.HighlightedText, QColor("#FFFFFF"))
    return pal


def _build_stylesheet(mode: str, accent: str) -> str:
    t = _tokens(mode, accent)

    return f"""
QWidget {{
    background: {t["BACKGROUND"]};
    color: {t["TEXT"]};
    font-size: 13px;
}}

QLabel {{
    background: transparent;
}}

QLabel#TitleLabel {{
    font-size: 22px;
    font-weight: 700;
}}

QLabel#MutedLabel {{
    color: {t["MUTED"]};
}}

QLabel#WarningTitle {{
    color: {DANGER};
    font-size: 20px;
    font-weight: 800;
}}

QLabel#StatusActive {{
    color: {DANGER};
    font-weight: 700;
}}

QLabel#StatusInactive {{
    color: {OK};
    font-weight: 700;
}}

QFrame#Card {{
    background: {t["SURFACE"]};
    border: 1px solid {t["BORDER"]};
    border-radius: 12px;
}}

QPushButton {{
    background-color: {t["ACCENT"]};
    color: white;
    border: none;
    border-radius: 10px;
    padding: 8px 14px;
    font-weight: 600;
}}
QPushButton:hover {{
    background-color: {t["ACCENT_HOVER"]};
}}
QPushButton:disabled {{
    background-color: {t["BORDER"]};
    color: {t["MUTED"]};
}}

QPushButton#SecondaryButton {{
    background: transparent;
    color: {t["ACCENT"]};
    border: 1px solid {t["BORDER"]};
}}

QPushButton#DangerButton {{
    background-color: {DANGER};
}}

QPushButton#CautionButton {{
    background-color: {CAUTION};
}}

QLineEdit, QComboBox, QTimeEdit, QTextEdit {{
    background: {t["SURFACE"]};
    border: 1px solid {t["BORDER"]};
    border-radius: 10px;
    padding: 6px 10px;
}}
QLineEdit:focus, QComboBox:focus, QTimeEdit:focus, QTextEdit:focus {{
    border-color: {t["ACCENT"]};
}}

QTabBar::tab {{
    background: transparent;
    padding: 8px 14px;
    color: {t["MUTED"]};
    font-weight: 600;
}}
QTabBar::tab:selected {{
    color: {t["TEXT"]};
    border-bottom: 3px solid {t["ACCENT"]};
}}

QTableWidget {{
    background: {t["SURFACE"]};
    border: 1px solid {t["BORDER"]};
    border-radius: 10px;
    gridline-color: {t["BORDER"]};
}}

QProgressBar {{
    border: none;
    border-radius: 5px;
    background: {t["BORDER"]};
    max-height: 10px;
}}
QProgressBar::chunk {{
    background: {OK};
    border-radius: 5px;
}}
"""


def apply_theme(app, mode: str = None, accent: str = None):
    saved_mode, saved_accent = load_theme_preference()
    mode = mode or saved_mode
    accent = accent or saved_accent
    app.setPalette(_build_palette(mode, accent))
    app.setStyleSheet(_build_stylesheet(mode, accent))
