"""Terminal stopwatch: prints the elapsed time and rings when a break is due."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Callable, TextIO

from dotenv import load_dotenv

from breakclock.core.config import load_config_env
from breakclock.core.timer import Timer, TimerState, format_elapsed


logger = logging.getLogger(__name__)

TICK_SECONDS = 1.0
RESET = "\033[0m"
ANSI_COLORS = {
    TimerState.NORMAL: "",
    TimerState.BREAK_DUE: "\033[33m",
    TimerState.BREAK_OVERDUE: "\033[31m",
}
BELL = "\a"


def render_line(elapsed_seconds: int, state: TimerState) -> str:
    color = ANSI_COLORS[state]
    text = format_elapsed(elapsed_seconds)
    if not color:
        return f"\r{text}"
    return f"\r{color}{text}{RESET}"


def run(
    timer: Timer,
    sleep: Callable[[float], None] = time.sleep,
    out: TextIO = sys.stdout,
    max_ticks: int | None = None,
) -> None:
    """Tick once per second until interrupted or ``max_ticks`` is reached."""
    state = timer.current_state()
    out.write(render_line(timer.elapsed_seconds, state))
    out.flush()

    ticks = 0
    while max_ticks is None or ticks < max_ticks:
        sleep(TICK_SECONDS)
        snapshot = timer.tick()
        ticks += 1

        line = render_line(snapshot.elapsed_seconds, snapshot.state)
        if snapshot.state != state:
            logger.debug("State changed %s -> %s at %ss", state.value, snapshot.state.value, snapshot.elapsed_seconds)
            if snapshot.state != TimerState.NORMAL:
                line += BELL
            state = snapshot.state
        out.write(line)
        out.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="breakclock",
        description="Stopwatch that reminds you to take a break. "
        "Thresholds come from BREAKCLOCK_WARN_THRESHOLD_SECONDS and "
        "BREAKCLOCK_ALERT_THRESHOLD_SECONDS.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    load_dotenv()
    timer = Timer(load_config_env())
    logger.info(
        "Starting with warn=%ss alert=%ss",
        timer.config.warn_threshold_seconds,
        timer.config.alert_threshold_seconds,
    )

    try:
        run(timer)
    except KeyboardInterrupt:
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
