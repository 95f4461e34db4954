# src/fixer1132/tasks/launcher.py

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from .task_models import LaunchFailure, ProcessResult

logger = logging.getLogger(__name__)


class SubprocessLauncher:
    """
    Blocking process launcher: run an executable, wait for it, capture its output.

    No timeout is applied; a hung child hangs the calling step.
    """

    def run(self, executable: str, args: Sequence[str]) -> ProcessResult:
        argv = [executable, *args]
        logger.debug("Launching %s (%d args)", executable, len(args))
        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise LaunchFailure(f"Failed to launch {executable}: {e.strerror or e}") from e

        logger.debug("%s exited with %s", executable, completed.returncode)
        return ProcessResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
