from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .models import GlobalSettings, Light, LightStatus, MAX_BRIGHTNESS

logger = logging.getLogger(__name__)


def is_dark(hour: int, dark_from: int = 18, dark_until: int = 6) -> bool:
    # Both ends are dark: 06:xx and 18:xx count as night.
    return hour >= dark_from or hour <= dark_until


@dataclass(frozen=True)
class LightDecision:
    status: Optional[LightStatus]  # None keeps the current status
    brightness: Optional[int]      # None keeps the current brightness
    reason: str


@dataclass
class ControllerState:
    ticks: int = 0
    last_tick_utc: Optional[datetime] = None
    last_hour: Optional[int] = None
    last_dark: Optional[bool] = None
    last_changed: int = 0


class AutonomousController:
    def __init__(self, dark_from: int = 18, dark_until: int = 6) -> None:
        self.dark_from = dark_from
        self.dark_until = dark_until
        self.state = ControllerState()

    def is_dark(self, hour: int) -> bool:
        return is_dark(hour, self.dark_from, self.dark_until)

    def decide(self, light: Light, gs: GlobalSettings, dark: bool) -> LightDecision:
        if light.needs_maintenance:
            return LightDecision(None, None, "Needs maintenance")

        # Motion beats the darkness rule for this tick
        if gs.motion_detection and light.motion_detected:
            return LightDecision(LightStatus.ON, MAX_BRIGHTNESS, "Motion detected")

        if gs.light_sensor:
            if dark:
                return LightDecision(LightStatus.ON, None, "Dark (ambient sensor)")
            return LightDecision(LightStatus.OFF, None, "Daylight (ambient sensor)")

        return LightDecision(None, None, "No active rule")

    @staticmethod
    def apply(light: Light, decision: LightDecision) -> bool:
        """Write a decision onto the light. Returns True if anything changed."""
        changed = False
        if decision.status is not None and decision.status is not light.status:
            light.status = decision.status
            changed = True
        if decision.brightness is not None and decision.brightness != light.brightness:
            light.brightness = decision.brightness
            changed = True
        return changed
