# src/fixer1132/core/service.py

"""
Caller-facing operations.

Whatever drives the app (console REPL, tests) talks to FixerService only.
All coroutines here must run on the loop that owns the TaskRunner.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..macos.actions import SPOOF_MAC_TITLE, START_ZOOM_TITLE, spoof_mac_steps, start_application_steps
from ..tasks.task_models import TaskOutcome
from ..tasks.task_runner import TaskRunner
from ..updates.release_client import ReleaseInfo, check_for_update

logger = logging.getLogger(__name__)


class FixerService:
    def __init__(
        self,
        settings: Any,
        runner: TaskRunner,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.runner = runner
        self._http_client = http_client
        self.has_spoofed_mac_address = False

    async def request_spoof_mac_address(self) -> TaskOutcome:
        outcome = await self.runner.run(SPOOF_MAC_TITLE, spoof_mac_steps(self.settings))
        if outcome.ok:
            self.has_spoofed_mac_address = True
        return outcome

    async def request_start_application(self) -> TaskOutcome:
        return await self.runner.run(START_ZOOM_TITLE, start_application_steps(self.settings))

    def clear_log(self) -> None:
        self.runner.clear()

    def current_log_lines(self) -> list[str]:
        return self.runner.log.lines()

    def is_busy(self) -> bool:
        return self.runner.is_running

    async def check_for_update(self, current_version: str | None = None) -> ReleaseInfo | None:
        return await check_for_update(current_version, self.settings, client=self._http_client)
