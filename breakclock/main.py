"""Entry point for the Break Clock window.

Loads the TOML configuration from the user's config directory, builds the
timer and starts the Qt event loop.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from breakclock.core.config import load_config_file
from breakclock.core.timer import Timer
from breakclock.ui.main_window import MainWindow
from breakclock.ui.styles import apply_theme


def main() -> int:
    """Create the timer from the config file and run the UI loop."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app = QApplication(sys.argv)
    apply_theme(app)

    timer = Timer(load_config_file())

    window = MainWindow(timer=timer)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
