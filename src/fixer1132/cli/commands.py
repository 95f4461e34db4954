# src/fixer1132/cli/commands.py

from __future__ import annotations

import concurrent.futures
import inspect
import logging
from collections.abc import Callable
from typing import cast

from .. import __version__
from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

EMPTY_LOG_TEXT = "No logs yet. Run an action to see output."
START_BLOCKED_TEXT = (
    "MAC address has not been spoofed in this session. "
    "Run /spoof first, or /start --force to launch anyway."
)

# Extra wait on top of the HTTP timeout before /update gives up.
UPDATE_GRACE_SECONDS = 5.0


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /spoof, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    bg = state.background
    busy = bg.call(state.service.is_busy) if bg is not None else state.service.is_busy()
    release = state.available_release
    update = f"{release.version} available ({release.html_url})" if release else "none known"
    return (
        "Status:\n"
        f"  Runner: {'Task Running' if busy else 'Ready'}\n"
        f"  MAC spoofed this session: {'yes' if state.service.has_spoofed_mac_address else 'no'}\n"
        f"  Version: {__version__} (update: {update})"
    )


def cmd_version(state: AppState, args: list[str]) -> str:
    app_name = str(getattr(state.settings, "app_name", "1132 Fixer"))
    repo = getattr(state.settings, "repository_url", None)
    if repo:
        return f"{app_name} {__version__}\n{repo}"
    return f"{app_name} {__version__}"


def cmd_spoof(state: AppState, args: list[str]) -> str:
    """Queue the MAC spoof; progress shows up through the activity log."""
    state.background.submit(state.service.request_spoof_mac_address())
    return ""


def cmd_start(state: AppState, args: list[str]) -> str:
    """
    /start          -> launch Zoom (only after a successful /spoof in this session)
    /start --force  -> launch Zoom regardless
    """
    force = any(a.lower() in ("--force", "-f") for a in args)
    if not state.service.has_spoofed_mac_address and not force:
        return START_BLOCKED_TEXT
    state.background.submit(state.service.request_start_application())
    return ""


def cmd_log(state: AppState, args: list[str]) -> str:
    lines = state.background.call(state.service.current_log_lines)
    if not lines:
        return EMPTY_LOG_TEXT
    return "\n".join(lines)


def cmd_clear(state: AppState, args: list[str]) -> str:
    state.background.call(state.service.clear_log)
    return "Activity log cleared."


def cmd_update(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit is not None:
        emit("Checking for updates...")

    timeout = float(getattr(state.settings, "update_timeout_seconds", 10.0)) + UPDATE_GRACE_SECONDS
    fut = state.background.submit(state.service.check_for_update())
    try:
        release = fut.result(timeout=timeout)
    except concurrent.futures.TimeoutError:
        fut.cancel()
        logger.debug("Update check did not finish in %.1fs", timeout)
        return "Update check timed out."

    state.available_release = release
    if release is None:
        return f"No update available (running {__version__})."
    return f"Update available: {release.version} - {release.html_url}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show runner state and version.")
registry.register("spoof", cmd_spoof, help_text="1. Spoof the Wi-Fi MAC address (admin prompt).", aliases=["mac"])
registry.register("start", cmd_start, help_text="2. Start Zoom with the sandbox policy (--force to skip the spoof check).", aliases=["zoom"])
registry.register("log", cmd_log, help_text="Show the activity log.", aliases=["logs"])
registry.register("clear", cmd_clear, help_text="Clear the activity log.")
registry.register("update", cmd_update, help_text="Check GitHub for a newer release.")
registry.register("version", cmd_version, help_text="Show the app version and repository.")
