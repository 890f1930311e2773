from __future__ import annotations
import logging
from typing import Optional

from ..domain.models import Light
from .fleet import FleetContext

logger = logging.getLogger(__name__)


class EventSimulator:
    """Uncontrolled field events: stray toggles and equipment faults.

    Runs whether or not auto mode is on.
    """

    def __init__(self, ctx: FleetContext) -> None:
        self._ctx = ctx

    def random_toggle_fault(self) -> Optional[Light]:
        ctx = self._ctx
        if ctx.rng.random() >= ctx.config.toggle_fault_probability:
            return None

        lights = ctx.registry.all()
        if not lights:
            return None

        light = ctx.rng.choice(lights)
        if light.needs_maintenance or ctx.rng.random() >= ctx.config.toggle_fault_coin:
            return None

        light.status = light.status.flipped()
        logger.warning("Random toggle fault: light %d now %s", light.id, light.status.value)
        ctx.refresh_stats()
        return light

    def random_maintenance_fault(self) -> Optional[Light]:
        ctx = self._ctx
        if ctx.rng.random() >= ctx.config.maintenance_fault_probability:
            return None

        candidates = ctx.registry.functional()
        if not candidates:
            return None

        light = ctx.rng.choice(candidates)
        light.needs_maintenance = True
        logger.warning("Maintenance fault: light %d", light.id)
        ctx.refresh_stats()
        ctx.publish(f"Light {light.id} requires maintenance!", "warning", light.id)
        return light
