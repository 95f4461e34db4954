# src/fixer1132/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


@dataclass(slots=True, frozen=True)
class ProcessResult:
    """Outcome of one external-process invocation."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def combined_output(self) -> str:
        """stdout and stderr, blank parts dropped, joined by a newline."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part.strip())


class OutcomeStatus(StrEnum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    REJECTED = "rejected"  # another task was already running


@dataclass(slots=True, frozen=True)
class TaskOutcome:
    """
    What happened to one requested task.

    Callers inspect this instead of registering success callbacks:
    "do X only if the whole task succeeded" becomes `if outcome.ok: ...`.
    """

    title: str
    status: OutcomeStatus
    output: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCEEDED

    @classmethod
    def rejected(cls, title: str) -> TaskOutcome:
        return cls(title=title, status=OutcomeStatus.REJECTED)


class TaskError(Exception):
    """Base class for failures rendered into the activity log as "Error: ..."."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StepFailure(TaskError):
    """A step's process exited non-zero."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code


class LaunchFailure(TaskError):
    """The process could not be started at all (missing executable, permissions, ...)."""
