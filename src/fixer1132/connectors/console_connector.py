# src/fixer1132/connectors/console_connector.py

from __future__ import annotations

import concurrent.futures
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..updates.release_client import ReleaseInfo

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def _print_log_line(line: str) -> None:
    # Activity log lines already carry their own timestamp.
    print(line, flush=True)


def _announce_update(state: AppState, fut: concurrent.futures.Future[ReleaseInfo | None]) -> None:
    if fut.cancelled() or fut.exception() is not None:
        return
    release = fut.result()
    if release is None:
        return
    state.available_release = release
    _print_ts(f"Update available: {release.version} - {release.html_url}")


def run_console_loop(state: AppState) -> None:
    bg = state.background
    app_name = str(getattr(state.settings, "app_name", "1132 Fixer"))

    logger.info("Console connector started.")
    _print_ts(f"[{app_name}] Bypass Error 1132 in 2 steps: /spoof, then /start. Use /help for commands, /exit to quit.")

    bg.call(state.runner.log.subscribe, _print_log_line)

    update_fut = bg.submit(state.service.check_for_update())
    update_fut.add_done_callback(lambda f: _announce_update(state, f))

    def emit(text: str) -> None:
        _print_ts(text)

    try:
        while True:
            try:
                user_input = input(">>> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                cmd_response = command_registry.handle(state, user_input, emit=emit)
            except Exception:
                logger.exception("Command handler crashed.")
                cmd_response = "Internal error while handling a command."

            if cmd_response is None:
                _print_ts("Commands start with '/'. Use /help to list them.")
                continue

            if cmd_response:
                print(cmd_response, flush=True)
    finally:
        bg.call(state.runner.log.unsubscribe, _print_log_line)

    logger.info("Console connector finished.")
