# src/fixer1132/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task runner depends on Protocols instead of concrete implementations.
This keeps the OS facilities swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import Protocol

from ..tasks.task_models import ProcessResult


class ProcessLauncher(Protocol):
    """
    OS process-launch facility.

    Runs (executable, args) to completion and returns exit code + captured output.
    Raises LaunchFailure if the process cannot be started at all.
    """

    def run(self, executable: str, args: Sequence[str]) -> ProcessResult: ...


class Step(Protocol):
    """One external-process invocation that is part of a task."""

    def describe(self) -> str: ...

    def execute(self, launcher: ProcessLauncher) -> ProcessResult: ...

    def failure_message(self, result: ProcessResult) -> str:
        """Message used when the failing step produced no output at all."""
        ...
