from __future__ import annotations
import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Runs ``fn`` every ``interval_s`` seconds on the current event loop.

    The first call happens one interval after start. An exception from ``fn``
    is logged and the loop keeps going.
    """

    def __init__(self, name: str, interval_s: float, fn: Callable[[], object]) -> None:
        self.name = name
        self.interval_s = interval_s
        self._fn = fn
        self._task: Optional[asyncio.Task] = None
        self._stop = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        self._stop.clear()
        self._task = asyncio.create_task(self._run(), name=self.name)

    async def stop(self) -> None:
        self._stop.set()
        if self._task:
            await self._task
            self._task = None

    async def _run(self) -> None:
        logger.info("%s loop started (interval=%ss)", self.name, self.interval_s)

        while not self._stop.is_set():
            # sleep with cancellation awareness
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.interval_s)
            except asyncio.TimeoutError:
                pass

            if self._stop.is_set():
                break

            try:
                self._fn()
            except Exception as e:
                logger.exception("%s tick error: %s", self.name, e)

        logger.info("%s loop stopped", self.name)
