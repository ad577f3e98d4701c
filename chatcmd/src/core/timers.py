"""
Deferred callbacks for command handlers.

Handlers that need follow-up work (reminders, timed messages) schedule it
here instead of blocking. Callbacks run on the asyncio event loop that is
running when they are scheduled.
"""

import asyncio
from typing import Callable, List, Optional

from ..logging_config import get_logger

logger = get_logger("core.timers")


class SchedulerUnavailableError(RuntimeError):
    """Raised when a callback is scheduled without a running event loop."""


class Scheduler:
    """Schedules plain callbacks on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._handles: List[asyncio.TimerHandle] = []

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError as e:
            raise SchedulerUnavailableError("No running event loop to schedule on") from e

    def call_later(self, delay: float, callback: Callable[..., None], *args) -> asyncio.TimerHandle:
        """Run ``callback(*args)`` after ``delay`` seconds."""
        loop = self._get_loop()
        handle = loop.call_later(delay, self._run, callback, args)
        # Drop handles that already fired or were cancelled
        self._handles = [h for h in self._handles if not h.cancelled() and h.when() > loop.time()]
        self._handles.append(handle)
        logger.debug(f"Scheduled {getattr(callback, '__name__', callback)!s} in {delay:.2f}s")
        return handle

    def _run(self, callback: Callable[..., None], args: tuple) -> None:
        try:
            callback(*args)
        except Exception:
            logger.exception("Scheduled callback failed")

    def cancel_all(self) -> None:
        """Cancel every callback that has not run yet."""
        for handle in self._handles:
            handle.cancel()
        self._handles.clear()
