"""Cancellable debounce timer for asyncio.

A ``Debouncer`` runs a coroutine function once input has been quiet for
``delay`` seconds. Each new call restarts the timer. Only the waiting
timer is ever cancelled: a callback that has already fired runs to
completion in its own task, and callers that care about superseded work
must discard its result themselves.

Example:
    >>> debouncer = Debouncer(0.5)
    >>> debouncer.call(apply_query)  # typed "f"
    >>> debouncer.call(apply_query)  # typed "fo", first timer cancelled
    >>> await debouncer.wait()       # apply_query runs once

"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

logger = logging.getLogger(__name__)

Callback = Callable[[], Coroutine[Any, Any, None]]


class Debouncer:
    """Delay a callback until calls stop arriving."""

    __slots__ = ("_running", "_timer", "delay")

    def __init__(self, delay: float) -> None:
        """Initialize the debouncer.

        Args:
            delay: Quiet period in seconds.

        """
        self.delay = delay
        self._timer: asyncio.Task[None] | None = None
        self._running: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> bool:
        """True while a timer is armed or a fired callback is still running."""
        if self._timer is not None and not self._timer.done():
            return True
        return any(not task.done() for task in self._running)

    def call(self, callback: Callback) -> None:
        """Arm the timer for ``callback``, replacing any armed timer.

        Must be called from within a running event loop.

        """
        self.cancel()
        self._timer = asyncio.create_task(self._arm(callback))

    async def _arm(self, callback: Callback) -> None:
        """Sleep out the quiet period, then start the callback."""
        await asyncio.sleep(self.delay)
        self._running.add(asyncio.create_task(callback()))

    def cancel(self) -> None:
        """Disarm the timer. A callback that already fired keeps running."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
            logger.debug("Debounced call cancelled")
        self._timer = None

    async def wait(self) -> None:
        """Wait until the timer has fired and every started callback has finished.

        Raises:
            Exception: The first error raised by a finished callback.

        """
        while True:
            waiting = {task for task in self._running if not task.done()}
            if self._timer is not None and not self._timer.done():
                waiting.add(self._timer)
            if not waiting:
                break
            # Re-armed timers and newly fired callbacks are picked up next pass
            await asyncio.wait(waiting)

        finished, self._running = self._running, set()
        errors = [task.exception() for task in finished if not task.cancelled()]
        for error in errors:
            if error is not None:
                raise error
