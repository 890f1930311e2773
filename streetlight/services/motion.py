from __future__ import annotations
import asyncio
import logging
from typing import Optional

from ..domain.models import Light

logger = logging.getLogger(__name__)


class MotionTracker:
    """Raises ``motion_detected`` on a light and clears it after a hold window.

    Every pulse gets a generation number per light. A newer pulse cancels the
    pending clear of the older one, and a clear that fires for a stale
    generation leaves the flag alone.
    """

    def __init__(self, hold_seconds: float = 5.0, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self.hold_seconds = hold_seconds
        self._loop = loop
        self._generation: dict[int, int] = {}
        self._handles: dict[int, tuple[asyncio.TimerHandle, Light]] = {}

    def generation(self, light_id: int) -> int:
        return self._generation.get(light_id, 0)

    def pending(self) -> int:
        return len(self._handles)

    def pulse(self, light: Light) -> int:
        # Schedule the clear first: if that fails, the light and any older pulse are untouched
        loop = self._loop or asyncio.get_running_loop()
        gen = self.generation(light.id) + 1
        handle = loop.call_later(self.hold_seconds, self._clear, light, gen)

        self._generation[light.id] = gen
        old = self._handles.pop(light.id, None)
        if old is not None:
            old[0].cancel()

        light.motion_detected = True
        self._handles[light.id] = (handle, light)
        logger.debug("Motion on light %d (gen=%d)", light.id, gen)
        return gen

    def _clear(self, light: Light, gen: int) -> None:
        if self._generation.get(light.id) != gen:
            logger.debug("Stale motion clear for light %d (gen=%d)", light.id, gen)
            return
        self._handles.pop(light.id, None)
        light.motion_detected = False
        logger.debug("Motion cleared on light %d", light.id)

    def cancel_all(self) -> None:
        """Drop every pending clear and clear the flags those clears would have reset."""
        for handle, light in self._handles.values():
            handle.cancel()
            light.motion_detected = False
        self._handles.clear()
