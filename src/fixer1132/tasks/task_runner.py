# src/fixer1132/tasks/task_runner.py

from __future__ import annotations

"""
Single-flight task runner.

- At most one task executes at a time; a request made while busy is rejected
  with a log line, nothing is spawned and nothing else changes.
- Steps of a task run strictly in order, each in a worker thread, and the
  first non-zero exit aborts the task.
- Every outcome ends up as a line in the ActivityLog; no failure escapes.

All state (busy flag, log) is owned by the event loop that calls submit();
nothing here is thread-safe and nothing needs to be.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from ..core.ports import ProcessLauncher, Step
from .task_models import OutcomeStatus, StepFailure, TaskError, TaskOutcome

logger = logging.getLogger(__name__)

BUSY_MESSAGE = "Another task is already running."
DONE_MESSAGE = "Done."

LogListener = Callable[[str], None]


def _ts_utc() -> str:
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


class ActivityLog:
    """Append-only list of timestamped lines. Cleared only as a whole."""

    def __init__(self, clock: Callable[[], str] = _ts_utc) -> None:
        self._clock = clock
        self._lines: list[str] = []
        self._listeners: list[LogListener] = []

    def append(self, text: str) -> str:
        line = f"[{self._clock()}] {text}"
        self._lines.append(line)
        for listener in list(self._listeners):
            try:
                listener(line)
            except Exception:
                logger.debug("Activity log listener failed.", exc_info=True)
        return line

    def clear(self) -> None:
        self._lines.clear()

    def lines(self) -> list[str]:
        return list(self._lines)

    def subscribe(self, listener: LogListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: LogListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def __len__(self) -> int:
        return len(self._lines)


class TaskRunner:
    def __init__(self, launcher: ProcessLauncher, log: ActivityLog | None = None) -> None:
        self._launcher = launcher
        self.log = log if log is not None else ActivityLog()
        self._running = False
        self._current: asyncio.Task[TaskOutcome] | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def current_task(self) -> asyncio.Task[TaskOutcome] | None:
        return self._current

    def submit(self, title: str, steps: Sequence[Step]) -> asyncio.Task[TaskOutcome] | None:
        """
        Start a task unless one is already running.

        Must be called from the event loop thread (RuntimeError otherwise,
        with no state touched). The busy check and the flag update happen
        with no await in between, so two requests can never both pass the check.

        Returns the scheduled asyncio task, or None if the request was rejected.
        """
        loop = asyncio.get_running_loop()

        if self._running:
            self._append(BUSY_MESSAGE)
            logger.info("Rejected %r: another task is already running", title)
            return None

        self._running = True
        self._append(f"=== {title} ===")
        task = loop.create_task(self._execute(title, list(steps)), name=f"task:{title}")
        self._current = task
        return task

    async def run(self, title: str, steps: Sequence[Step]) -> TaskOutcome:
        task = self.submit(title, steps)
        if task is None:
            return TaskOutcome.rejected(title)
        return await task

    def clear(self) -> None:
        self.log.clear()

    async def _execute(self, title: str, steps: list[Step]) -> TaskOutcome:
        try:
            outputs: list[str] = []
            for index, step in enumerate(steps, start=1):
                logger.debug("%s: step %d/%d %s", title, index, len(steps), step.describe())
                result = await asyncio.to_thread(step.execute, self._launcher)

                combined = result.combined_output()
                if not result.ok:
                    message = combined if combined.strip() else step.failure_message(result)
                    raise StepFailure(result.returncode, message)

                if combined.strip():
                    outputs.append(combined)

            output = "\n".join(outputs)
            self._append(output if output.strip() else DONE_MESSAGE)
            return TaskOutcome(title=title, status=OutcomeStatus.SUCCEEDED, output=output)

        except TaskError as e:
            self._append(f"Error: {e.message}", level=logging.WARNING)
            return TaskOutcome(title=title, status=OutcomeStatus.FAILED, error=e.message)

        except Exception as e:
            logger.exception("Task %r crashed", title)
            message = str(e) or e.__class__.__name__
            self._append(f"Error: {message}", level=logging.ERROR)
            return TaskOutcome(title=title, status=OutcomeStatus.FAILED, error=message)

        finally:
            self._running = False
            self._current = None

    def _append(self, text: str, *, level: int = logging.INFO) -> None:
        self.log.append(text)
        logger.log(level, "%s", text)
