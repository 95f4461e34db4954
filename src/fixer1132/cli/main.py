# src/fixer1132/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the runner's event loop in a
background thread, then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging
import signal

from .. import __version__
from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..connectors.loop_thread import start_background_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s %s (log file: %s)", settings.app_name, __version__, log_file)

    state = create_initial_state(settings=settings)

    background = start_background_loop(state)
    if background is None:
        logger.error("Could not start the task loop; exiting.")
        return 1
    state.background = background

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        raise KeyboardInterrupt

    try:
        signal.signal(signal.SIGTERM, _handle_signal)
    except (ValueError, OSError):
        # Not on the main thread, or platform without SIGTERM.
        pass

    try:
        run_console_loop(state)
    finally:
        background.stop()
        background.join(timeout=None)
        logger.info("Bye.")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
