from __future__ import annotations
import logging

from ..core.timeutil import now_utc
from ..domain.controller import AutonomousController
from .fleet import FleetContext

logger = logging.getLogger(__name__)


class AutopilotService:
    """One autonomous control pass over the fleet per tick."""

    def __init__(self, ctx: FleetContext, controller: AutonomousController) -> None:
        self._ctx = ctx
        self._controller = controller

    @property
    def controller(self) -> AutonomousController:
        return self._controller

    def tick(self) -> int:
        ctx = self._ctx
        gs = ctx.settings
        if not gs.auto_mode:
            return 0

        hour = ctx.ambient.read_hour()
        dark = self._controller.is_dark(hour)
        changed = 0

        for light in ctx.registry.all():
            if light.needs_maintenance:
                continue
            try:
                # Motion simulation
                if gs.motion_detection and ctx.rng.random() < ctx.config.motion_probability:
                    ctx.motion.pulse(light)

                decision = self._controller.decide(light, gs, dark)
                if self._controller.apply(light, decision):
                    changed += 1
                    logger.debug("light %d -> %s @%d (%s)", light.id, light.status.value,
                                 light.brightness, decision.reason)
            except Exception as e:
                logger.exception("Auto control failed for light %d: %s", light.id, e)

        st = self._controller.state
        st.ticks += 1
        st.last_tick_utc = now_utc()
        st.last_hour = hour
        st.last_dark = dark
        st.last_changed = changed

        ctx.refresh_stats()
        logger.info("auto tick: hour=%d dark=%s changed=%d active=%d/%d",
                    hour, dark, changed, ctx.stats.active_lights, ctx.stats.total_lights)
        return changed
