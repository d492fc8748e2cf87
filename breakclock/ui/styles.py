from __future__ import annotations

from PyQt6.QtWidgets import QApplication

from breakclock.core.timer import TimerState


TEXT_COLOR = "#e8e6e3"

STATE_COLORS = {
    TimerState.NORMAL: TEXT_COLOR,
    TimerState.BREAK_DUE: "#ffff00",
    TimerState.BREAK_OVERDUE: "#ff0000",
}

THEME_QSS = f"""
QWidget {{
    background: #1f1f24;
    color: {TEXT_COLOR};
    font-size: 13px;
}}

QPushButton#TimerButton {{
    background: transparent;
    border: none;
    font-family: monospace;
    font-size: 32px;
    padding: 0;
}}

QPushButton#ResetButton {{
    background: transparent;
    border: 1px solid #3a3a42;
    border-radius: 6px;
    padding: 2px 8px;
}}

QPushButton#ResetButton:hover {{
    background: #2c2c33;
}}

QLabel#BreaksLabel {{
    font-size: 20px;
    background: transparent;
}}
"""


def apply_theme(app: QApplication) -> None:
    app.setStyleSheet(THEME_QSS)
