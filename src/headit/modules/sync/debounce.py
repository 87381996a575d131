"""Trailing-edge debounce on the asyncio event loop."""

import asyncio
import inspect
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.5


class DebounceState(Enum):
    """Whether a call is waiting for the quiet period to end."""

    IDLE = "idle"
    PENDING = "pending"


class DebounceController:
    """
    Coalesce bursts of triggers into one callback call.

    Each ``trigger`` restarts the timer and replaces the stored payload, so a
    burst of triggers closer together than ``interval`` ends in exactly one
    call carrying the last payload.  The callback may be a plain function or a
    coroutine function; coroutine results are scheduled as tasks.
    """

    def __init__(
        self,
        callback: Callable[[Any], Any],
        interval: float = DEFAULT_INTERVAL,
    ):
        self.callback = callback
        self.interval = interval
        self._handle: asyncio.TimerHandle | None = None
        self._payload: Any = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def state(self) -> DebounceState:
        return DebounceState.PENDING if self._handle is not None else DebounceState.IDLE

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, payload: Any = None) -> None:
        """Start or restart the quiet-period timer with ``payload``."""
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._payload = payload
        self._handle = loop.call_later(self.interval, self._fire)

    def cancel(self) -> bool:
        """Drop the pending call.  Returns False when nothing was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        self._payload = None
        return True

    async def flush(self) -> bool:
        """Run the pending call now and wait for it.  Returns False when idle."""
        if self._handle is None:
            return False
        self._handle.cancel()
        task = self._fire()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)
        return True

    async def wait(self) -> None:
        """Wait for callback tasks that are still running."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _fire(self) -> asyncio.Task | None:
        self._handle = None
        payload, self._payload = self._payload, None
        try:
            result = self.callback(payload)
        except Exception:
            logger.exception("Debounced call failed")
            return None

        if not inspect.isawaitable(result):
            return None
        task = asyncio.ensure_future(result)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Debounced call failed: %s", exc, exc_info=exc)
