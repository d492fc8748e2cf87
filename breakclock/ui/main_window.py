from __future__ import annotations

import logging

from PyQt6.QtCore import QElapsedTimer, QTimer, Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from breakclock.core.timer import Timer, TimerSnapshot, TimerState, format_elapsed
from breakclock.ui.styles import STATE_COLORS


logger = logging.getLogger(__name__)

REFRESH_INTERVAL_MS = 500


class MainWindow(QMainWindow):
    def __init__(self, timer: Timer) -> None:
        super().__init__()
        self.setWindowTitle("Break Clock")

        self.timer = timer
        config = timer.config
        self.resize(*config.window_size)
        self.move(*config.window_position)
        if config.always_on_top:
            self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, True)

        self._last_state = timer.current_state()
        self.elapsed = QElapsedTimer()
        self.elapsed.start()
        self.pending_ms = 0

        self._build_ui()
        self._connect_signals()

        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self._on_refresh)
        self.refresh_timer.start()

        self._render(timer.snapshot())

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        layout = QVBoxLayout(central)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.timer_btn = QPushButton()
        self.timer_btn.setObjectName("TimerButton")
        self.timer_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        layout.addWidget(self.timer_btn, 0, Qt.AlignmentFlag.AlignCenter)

        bottom_row = QHBoxLayout()
        self.breaks_label = QLabel()
        self.breaks_label.setObjectName("BreaksLabel")
        self.reset_btn = QPushButton("Reset")
        self.reset_btn.setObjectName("ResetButton")
        bottom_row.addWidget(self.breaks_label)
        bottom_row.addStretch()
        bottom_row.addWidget(self.reset_btn)
        layout.addLayout(bottom_row)

        space_action = QAction(self)
        space_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        space_action.triggered.connect(self.toggle_run)
        self.addAction(space_action)

        reset_action = QAction(self)
        reset_action.setShortcut(QKeySequence(Qt.Key.Key_R))
        reset_action.triggered.connect(self.reset)
        self.addAction(reset_action)

    def _connect_signals(self) -> None:
        self.timer_btn.clicked.connect(self.toggle_run)
        self.reset_btn.clicked.connect(self.reset)

    def toggle_run(self) -> None:
        self.timer.toggle_run()
        # Restart the second boundary so a resume does not count paused time.
        self.elapsed.restart()
        self.pending_ms = 0
        logger.debug("Timer %s at %ss", "resumed" if self.timer.running else "paused", self.timer.elapsed_seconds)
        self._render(self.timer.snapshot())

    def reset(self) -> None:
        self.timer.reset()
        self.elapsed.restart()
        self.pending_ms = 0
        self._last_state = self.timer.current_state()
        self._render(self.timer.snapshot())

    def _on_refresh(self) -> None:
        self.pending_ms += self.elapsed.restart()
        snapshot = self.timer.snapshot()
        while self.pending_ms >= 1000:
            self.pending_ms -= 1000
            snapshot = self.timer.tick()

        if snapshot.state != self._last_state:
            self._on_state_changed(snapshot)
            self._last_state = snapshot.state
        self._render(snapshot)

    def _on_state_changed(self, snapshot: TimerSnapshot) -> None:
        logger.info("State changed to %s after %ss", snapshot.state.value, snapshot.elapsed_seconds)
        if snapshot.state == TimerState.NORMAL:
            return
        QApplication.beep()
        QApplication.alert(self)

    def _render(self, snapshot: TimerSnapshot) -> None:
        if snapshot.running:
            self.timer_btn.setText(format_elapsed(snapshot.elapsed_seconds))
            self.timer_btn.setStyleSheet(f"color: {STATE_COLORS[snapshot.state]};")
            self.breaks_label.hide()
        else:
            self.timer_btn.setText("PAUSED")
            self.timer_btn.setStyleSheet("")
            self.breaks_label.setText(f"breaks: {snapshot.breaks_taken}")
            self.breaks_label.show()
