# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from fixer1132.tasks.task_runner import ActivityLog, TaskRunner

from .fakes import FakeLauncher


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the service and actions.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    return SimpleNamespace(
        app_name="1132 Fixer",
        log_level="INFO",
        data_dir=tmp_path / "data",
        update_check_enabled=True,
        update_timeout_seconds=10.0,
        release_owner="PrimeUpYourLife",
        release_repo="1132-fixer",
        releases_api_url="https://api.github.com/repos/PrimeUpYourLife/1132-fixer/releases/latest",
        repository_url="https://github.com/PrimeUpYourLife/1132-fixer",
        osascript_path="/usr/bin/osascript",
        shell_path="/bin/zsh",
        zoom_executable="/Applications/zoom.us.app/Contents/MacOS/zoom.us",
        temp_dir=temp_dir,
        mac_candidate_count=4,
    )


@pytest.fixture()
def launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture()
def runner(launcher: FakeLauncher) -> TaskRunner:
    """TaskRunner with a fixed clock so log lines are predictable."""
    return TaskRunner(launcher, log=ActivityLog(clock=lambda: "T"))
