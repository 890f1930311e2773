from __future__ import annotations
import logging
from typing import Optional

from ..domain.errors import ValidationError
from ..domain.models import CommandResult, LightStatus, MAX_BRIGHTNESS, MIN_BRIGHTNESS, Severity
from .fleet import FleetContext

logger = logging.getLogger(__name__)


def _require_bool(name: str, value: object) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be a boolean, got {value!r}")
    return value


def validate_brightness(value: object) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Brightness must be an integer, got {value!r}")
    try:
        v = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"Brightness must be an integer, got {value!r}") from None
    if v != value and not isinstance(value, str):
        raise ValidationError(f"Brightness must be a whole number, got {value!r}")
    if not MIN_BRIGHTNESS <= v <= MAX_BRIGHTNESS:
        raise ValidationError(f"Brightness must be within {MIN_BRIGHTNESS}..{MAX_BRIGHTNESS}, got {v}")
    return v


class CommandService:
    """Operator commands. Each one refreshes the stats snapshot before returning."""

    def __init__(self, ctx: FleetContext) -> None:
        self._ctx = ctx

    def _done(self, ok: bool, code: str, message: Optional[str], severity: Severity = "info",
              light_id: Optional[int] = None) -> CommandResult:
        self._ctx.refresh_stats()
        note = self._ctx.publish(message, severity, light_id) if message else None
        return CommandResult(ok=ok, code=code, notification=note)

    def toggle_light(self, light_id: int) -> CommandResult:
        light = self._ctx.registry.get(light_id)
        if light.needs_maintenance:
            logger.warning("Toggle blocked: light %d needs maintenance", light_id)
            return self._done(False, "maintenance_blocked", f"Light {light_id} needs maintenance!", "warning", light_id)

        light.status = light.status.flipped()
        logger.info("Light %d toggled to %s", light_id, light.status.value)
        return self._done(True, "ok", f"Light {light_id} turned {light.status.value}", light_id=light_id)

    def _set_all(self, status: LightStatus) -> int:
        changed = 0
        for light in self._ctx.registry.functional():
            if light.status is not status:
                light.status = status
                changed += 1
        logger.info("All functional lights set %s (%d changed)", status.value, changed)
        return changed

    def all_on(self) -> CommandResult:
        self._set_all(LightStatus.ON)
        return self._done(True, "ok", "All functional lights turned ON")

    def all_off(self) -> CommandResult:
        self._set_all(LightStatus.OFF)
        return self._done(True, "ok", "All lights turned OFF")

    def set_master_brightness(self, value: object) -> CommandResult:
        v = validate_brightness(value)
        self._ctx.settings.master_brightness = v
        # Lights that are off keep their last brightness until switched on
        for light in self._ctx.registry.all():
            if light.is_on:
                light.brightness = v
        logger.info("Master brightness set to %d", v)
        return self._done(True, "ok", f"Master brightness set to {v}%")

    def set_auto_mode(self, enabled: object) -> CommandResult:
        self._ctx.settings.auto_mode = _require_bool("auto_mode", enabled)
        logger.info("Auto mode %s", "enabled" if enabled else "disabled")
        if enabled:
            return self._done(True, "ok", "Auto mode ENABLED - Lights will respond to sensors")
        return self._done(True, "ok", "Auto mode DISABLED")

    def toggle_auto_mode(self) -> CommandResult:
        return self.set_auto_mode(not self._ctx.settings.auto_mode)

    def set_motion_detection(self, enabled: object) -> CommandResult:
        self._ctx.settings.motion_detection = _require_bool("motion_detection", enabled)
        logger.info("Motion detection %s", "enabled" if enabled else "disabled")
        return self._done(True, "ok", None)

    def set_light_sensor(self, enabled: object) -> CommandResult:
        self._ctx.settings.light_sensor = _require_bool("light_sensor", enabled)
        logger.info("Light sensor %s", "enabled" if enabled else "disabled")
        return self._done(True, "ok", None)
