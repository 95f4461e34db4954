# tests/test_launcher.py

from __future__ import annotations

import pytest

from fixer1132.tasks.launcher import SubprocessLauncher
from fixer1132.tasks.task_models import LaunchFailure, ProcessResult


def test_launcher_captures_both_streams_and_exit_code() -> None:
    result = SubprocessLauncher().run("/bin/sh", ["-c", "echo out; echo err >&2; exit 3"])

    assert result == ProcessResult(returncode=3, stdout="out\n", stderr="err\n")
    assert result.combined_output() == "out\n\nerr\n"
    assert not result.ok


def test_launcher_missing_executable_is_launch_failure(tmp_path) -> None:
    missing = str(tmp_path / "does-not-exist")

    with pytest.raises(LaunchFailure) as excinfo:
        SubprocessLauncher().run(missing, [])

    assert missing in excinfo.value.message


def test_combined_output_drops_blank_parts() -> None:
    assert ProcessResult(0, stdout="a", stderr="  ").combined_output() == "a"
    assert ProcessResult(0, stdout="", stderr="b").combined_output() == "b"
    assert ProcessResult(0).combined_output() == ""
