# tests/test_macos_actions.py

from __future__ import annotations

from fixer1132.macos.actions import spoof_mac_steps, start_application_steps
from fixer1132.macos.scripts import ZOOM_SANDBOX_PROFILE, render_spoof_script, zoom_launch_command
from fixer1132.tasks.steps import CommandStep, ElevatedScriptStep


def test_render_spoof_script_sets_candidate_count() -> None:
    script = render_spoof_script(6)

    assert script.startswith("#!/bin/zsh\nset -euo pipefail")
    assert "i < 6;" in script
    assert "__LOCAL_CANDIDATE_COUNT__" not in script
    assert "networksetup -listallhardwareports" in script
    assert "networksetup -detectnewhardware" in script
    assert "i < 1;" in render_spoof_script(0)


def test_zoom_launch_command_is_detached_and_sandboxed() -> None:
    cmd = zoom_launch_command("/Applications/zoom.us.app/Contents/MacOS/zoom.us")

    assert cmd.startswith("nohup sandbox-exec -p '(version 1)")
    assert "'/Applications/zoom.us.app/Contents/MacOS/zoom.us'" in cmd
    assert cmd.endswith("</dev/null >/dev/null 2>&1 &")
    assert r"data/.*\.db$" in ZOOM_SANDBOX_PROFILE
    assert r"data/.*\.db-journal$" in ZOOM_SANDBOX_PROFILE


def test_spoof_mac_steps_use_settings(settings) -> None:
    settings.mac_candidate_count = 2
    steps = spoof_mac_steps(settings)

    assert len(steps) == 1
    step = steps[0]
    assert isinstance(step, ElevatedScriptStep)
    assert step.osascript_path == settings.osascript_path
    assert step.shell_path == settings.shell_path
    assert step.temp_dir == settings.temp_dir
    assert "i < 2;" in step.script


def test_start_application_steps_use_login_shell(settings) -> None:
    steps = start_application_steps(settings)

    assert len(steps) == 1
    step = steps[0]
    assert isinstance(step, CommandStep)
    assert step.executable == "/bin/zsh"
    assert step.args[0] == "-lc"
    assert "sandbox-exec" in step.args[1]
