# src/fixer1132/connectors/loop_thread.py

from __future__ import annotations

import asyncio
import concurrent.futures
import contextlib
import logging
import threading
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any, TypeVar

from ..core.state import AppState

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _log_future_error(fut: concurrent.futures.Future[Any]) -> None:
    if fut.cancelled():
        return
    exc = fut.exception()
    if exc is not None:
        logger.error("Background operation failed.", exc_info=exc)


@dataclass
class BackgroundLoop:
    """
    The event loop that owns the TaskRunner, running in its own thread.

    Everything that touches runner/log state goes through submit() or call(),
    so all mutation happens on this one loop.
    """

    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def submit(self, coro: Coroutine[Any, Any, T]) -> concurrent.futures.Future[T]:
        fut = asyncio.run_coroutine_threadsafe(coro, self.loop)
        fut.add_done_callback(_log_future_error)
        return fut

    def call(self, fn: Callable[..., T], *args: Any, timeout: float | None = 5.0) -> T:
        """Run a plain function on the loop thread and wait for its result."""

        async def _invoke() -> T:
            return fn(*args)

        return asyncio.run_coroutine_threadsafe(_invoke(), self.loop).result(timeout=timeout)

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except Exception:
            logger.debug("Failed to signal loop stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


async def _serve(state: AppState, stop_event: asyncio.Event) -> None:
    await stop_event.wait()

    # Steps cannot be cancelled; let an in-flight task finish so its child is not orphaned mid-way.
    current = state.runner.current_task
    if current is not None:
        logger.info("Waiting for the running task to finish...")
        with contextlib.suppress(Exception):
            await current

    # Anything else (e.g. the start-up update check) is abandoned.
    me = asyncio.current_task()
    pending = [t for t in asyncio.all_tasks() if t is not me and not t.done()]
    if pending:
        logger.debug("Cancelling %d pending background operation(s).", len(pending))
        for t in pending:
            t.cancel()
        await asyncio.gather(*pending, return_exceptions=True)


def start_background_loop(state: AppState) -> BackgroundLoop | None:
    """
    Start the runner's event loop in a background thread.

    Why a thread:
    - console REPL is blocking (input()).
    - task runner is async and wants its own event loop.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(_serve(state, stop_event))
        finally:
            with contextlib.suppress(Exception):
                loop.run_until_complete(loop.shutdown_default_executor())
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="fixer-loop", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Loop thread did not initialize properly.")
        return None

    logger.debug("Background loop started.")
    return BackgroundLoop(thread=t, loop=loop, stop_event=stop_event)
