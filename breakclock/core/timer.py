from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from breakclock.core.config import TimerConfig


class TimerState(str, Enum):
    NORMAL = "normal"
    BREAK_DUE = "break_due"
    BREAK_OVERDUE = "break_overdue"


@dataclass(frozen=True)
class TimerSnapshot:
    elapsed_seconds: int
    running: bool
    state: TimerState
    breaks_taken: int


@dataclass(frozen=True)
class Session:
    paused: bool
    started_at: float
    ended_at: float

    @property
    def duration_seconds(self) -> int:
        return max(0, int(self.ended_at - self.started_at))


def classify(elapsed_seconds: int, warn_threshold_seconds: int, alert_threshold_seconds: int) -> TimerState:
    if elapsed_seconds >= alert_threshold_seconds:
        return TimerState.BREAK_OVERDUE
    if elapsed_seconds >= warn_threshold_seconds:
        return TimerState.BREAK_DUE
    return TimerState.NORMAL


def format_elapsed(seconds: int, full: bool = False) -> str:
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    seconds = seconds % 60
    if hours or full:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


class Timer:
    """Tick-driven stopwatch that flags when a break is due."""

    def __init__(self, config: TimerConfig | None = None, clock: Callable[[], float] = time.monotonic) -> None:
        self._config = config or TimerConfig()
        self._clock = clock
        self._elapsed_seconds = 0
        self._running = self._config.start_running
        self._segment_started = clock()
        self._sessions: list[Session] = []

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed_seconds

    @property
    def running(self) -> bool:
        return self._running

    @property
    def sessions(self) -> list[Session]:
        return list(self._sessions)

    @property
    def breaks_taken(self) -> int:
        return sum(1 for session in self._sessions if session.paused)

    def tick(self) -> TimerSnapshot:
        if self._running:
            self._elapsed_seconds += 1
        return self.snapshot()

    def reset(self) -> None:
        self._elapsed_seconds = 0

    def toggle_run(self) -> None:
        now = self._clock()
        self._sessions.append(Session(paused=not self._running, started_at=self._segment_started, ended_at=now))
        self._segment_started = now
        self._running = not self._running

    def current_state(self) -> TimerState:
        return classify(
            self._elapsed_seconds,
            self._config.warn_threshold_seconds,
            self._config.alert_threshold_seconds,
        )

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            elapsed_seconds=self._elapsed_seconds,
            running=self._running,
            state=self.current_state(),
            breaks_taken=self.breaks_taken,
        )
