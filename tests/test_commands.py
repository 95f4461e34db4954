# tests/test_commands.py

from __future__ import annotations

import concurrent.futures
from types import SimpleNamespace

from fixer1132 import __version__
from fixer1132.cli import commands
from fixer1132.cli.bootstrap import create_initial_state
from fixer1132.cli.commands import START_BLOCKED_TEXT, CommandRegistry, registry

from .fakes import FakeLauncher


class FakeBackground:
    """Runs plain calls inline and records (then closes) submitted coroutines."""

    def __init__(self, result=None) -> None:
        self.submitted: list[str] = []
        self.result = result

    def call(self, fn, *args, timeout=5.0):
        return fn(*args)

    def submit(self, coro):
        self.submitted.append(coro.__qualname__)
        coro.close()
        fut: concurrent.futures.Future = concurrent.futures.Future()
        fut.set_result(self.result)
        return fut


def _state(settings, background=None):
    state = create_initial_state(settings=settings, launcher=FakeLauncher())
    state.background = background or FakeBackground()
    return state


def test_command_registry_routes_2_and_3_params(settings) -> None:
    state = _state(settings)
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2:" + ",".join(args)

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a", aliases=["aa"])
    reg.register("b", h3, "b")

    notes: list[str] = []
    assert reg.handle(state, "/a x y") == "h2:x,y"
    assert reg.handle(state, "/AA") == "h2:"
    assert reg.handle(state, "/b", emit=notes.append) == "h3"
    assert called == {"h2": 2, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(settings) -> None:
    state = _state(settings)
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_help_lists_actions(settings) -> None:
    text = registry.handle(_state(settings), "/help") or ""
    assert "/spoof" in text and "/start" in text and "/exit" in text


def test_spoof_submits_to_background(settings) -> None:
    bg = FakeBackground()
    state = _state(settings, bg)

    assert registry.handle(state, "/spoof") == ""

    assert bg.submitted == ["FixerService.request_spoof_mac_address"]


def test_start_requires_spoof_or_force(settings) -> None:
    bg = FakeBackground()
    state = _state(settings, bg)

    assert registry.handle(state, "/start") == START_BLOCKED_TEXT
    assert bg.submitted == []

    assert registry.handle(state, "/zoom --force") == ""
    assert bg.submitted == ["FixerService.request_start_application"]


def test_start_after_successful_spoof(settings) -> None:
    bg = FakeBackground()
    state = _state(settings, bg)
    state.service.has_spoofed_mac_address = True

    assert registry.handle(state, "/start") == ""
    assert bg.submitted == ["FixerService.request_start_application"]


def test_log_and_clear(settings) -> None:
    state = _state(settings)
    assert registry.handle(state, "/log") == "No logs yet. Run an action to see output."

    state.runner.log.append("hello")
    assert (registry.handle(state, "/logs") or "").endswith("] hello")

    assert registry.handle(state, "/clear") == "Activity log cleared."
    assert state.runner.log.lines() == []


def test_update_reports_release(settings) -> None:
    release = SimpleNamespace(version="9.9.9", html_url="https://github.com/x/y/releases/tag/v9.9.9")
    state = _state(settings, FakeBackground(result=release))

    reply = registry.handle(state, "/update")

    assert reply == "Update available: 9.9.9 - https://github.com/x/y/releases/tag/v9.9.9"
    assert state.available_release is release


def test_update_reports_none_and_status(settings) -> None:
    state = _state(settings, FakeBackground(result=None))

    assert registry.handle(state, "/update") == f"No update available (running {__version__})."
    status = registry.handle(state, "/status") or ""
    assert "Ready" in status
    assert "MAC spoofed this session: no" in status
    assert registry.handle(state, "/version") == (
        f"1132 Fixer {__version__}\nhttps://github.com/PrimeUpYourLife/1132-fixer"
    )


class PendingBackground(FakeBackground):
    """submit() hands back a future that never completes."""

    def submit(self, coro):
        self.submitted.append(coro.__qualname__)
        coro.close()
        self.future: concurrent.futures.Future = concurrent.futures.Future()
        return self.future


def test_update_timeout_cancels_check(settings, monkeypatch) -> None:
    monkeypatch.setattr(commands, "UPDATE_GRACE_SECONDS", 0.0)
    settings.update_timeout_seconds = 0.05
    bg = PendingBackground()
    state = _state(settings, bg)

    assert registry.handle(state, "/update") == "Update check timed out."
    assert bg.future.cancelled()
    assert state.available_release is None
