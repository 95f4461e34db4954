# src/fixer1132/macos/actions.py

from __future__ import annotations

from typing import Any

from ..tasks.steps import CommandStep, ElevatedScriptStep
from .scripts import render_spoof_script, zoom_launch_command

SPOOF_MAC_TITLE = "Spoof MAC address"
START_ZOOM_TITLE = "Start Zoom"


def spoof_mac_steps(settings: Any) -> list[ElevatedScriptStep]:
    """One admin-elevated step: the whole spoof script runs as root in a single prompt."""
    return [
        ElevatedScriptStep(
            script=render_spoof_script(settings.mac_candidate_count),
            osascript_path=settings.osascript_path,
            shell_path=settings.shell_path,
            temp_dir=settings.temp_dir,
        )
    ]


def start_application_steps(settings: Any) -> list[CommandStep]:
    return [
        CommandStep(
            executable=settings.shell_path,
            args=("-lc", zoom_launch_command(settings.zoom_executable)),
        )
    ]
