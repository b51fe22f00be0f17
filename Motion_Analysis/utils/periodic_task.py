"""Cancellable fixed-interval callback on the running asyncio loop."""

import asyncio
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    """
    Calls `callback` every `interval_s` seconds until cancelled.

    The callback runs on the event loop thread, so it never interleaves with
    other loop callbacks. A tick that raises is logged and skipped; the
    schedule keeps running. advance() invokes the callback directly for
    deterministic tests and lets its exceptions propagate.
    """

    def __init__(self, interval_s: float, callback: Callable[[], Any], name: str = "periodic-task"):
        if interval_s <= 0:
            raise ValueError(f"interval_s must be positive, got {interval_s}")
        self.interval_s = interval_s
        self.callback = callback
        self.name = name
        self._task: Optional[asyncio.Task] = None
        self._tick_count = 0

    def start(self) -> asyncio.Task:
        """Schedule on the running loop. Raises RuntimeError if already running or no loop is running."""
        if self.is_running:
            raise RuntimeError(f"{self.name} is already running")
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(), name=self.name)
        logger.debug("%s: started, interval %.3fs", self.name, self.interval_s)
        return self._task

    def cancel(self) -> bool:
        """Cancel the pending tick. Returns False if nothing was running."""
        task, self._task = self._task, None
        if task is None or task.done():
            return False
        task.cancel()
        logger.debug("%s: cancelled after %d ticks", self.name, self._tick_count)
        return True

    def advance(self, ticks: int = 1):
        for _ in range(ticks):
            self._invoke()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def tick_count(self) -> int:
        return self._tick_count

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval_s)
            try:
                self._invoke()
            except Exception:
                # Logged in _invoke; the failed tick is dropped
                continue

    def _invoke(self):
        self._tick_count += 1
        try:
            self.callback()
        except Exception:
            logger.exception("%s: tick %d failed", self.name, self._tick_count)
            raise
