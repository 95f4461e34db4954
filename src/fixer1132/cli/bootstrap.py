# src/fixer1132/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures the local data directory exists (logs live there),
- wires one launcher, one TaskRunner and one FixerService into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import ProcessLauncher
from ..core.service import FixerService
from ..core.state import AppState
from ..tasks.launcher import SubprocessLauncher
from ..tasks.task_runner import TaskRunner

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, launcher: ProcessLauncher | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and the launcher injectable makes the app easier to test:
    tests never spawn real processes. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    runner = TaskRunner(launcher if launcher is not None else SubprocessLauncher())
    service = FixerService(settings, runner)
    logger.debug("State created (data_dir=%s)", settings.data_dir)
    return AppState(settings=settings, runner=runner, service=service)
