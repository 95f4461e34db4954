# src/fixer1132/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_runner import TaskRunner
from ..updates.release_client import ReleaseInfo
from .service import FixerService


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    runner: TaskRunner
    service: FixerService

    available_release: ReleaseInfo | None = None

    # BackgroundLoop owning the runner (set by the CLI once the loop thread is up).
    background: Any = None
