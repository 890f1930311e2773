from __future__ import annotations
import logging

from ..core.timeutil import now_utc
from ..domain.models import EnvironmentReading
from .fleet import FleetContext

logger = logging.getLogger(__name__)

TEMPERATURES_C = (18, 19, 20, 21, 22, 23, 24, 25)
VISIBILITY = ("Excellent", "Good", "Fair", "Poor")


class EnvironmentFeed:
    """Street-level weather readout for displays. Never drives the lights."""

    def __init__(self, ctx: FleetContext) -> None:
        self._ctx = ctx

    def sample(self) -> EnvironmentReading:
        rng = self._ctx.rng
        reading = EnvironmentReading(
            ts_utc=now_utc(),
            temperature_c=rng.choice(TEMPERATURES_C),
            visibility=rng.choice(VISIBILITY),
        )
        self._ctx.environment = reading
        logger.debug("Environment: %d C, visibility %s", reading.temperature_c, reading.visibility)
        return reading
