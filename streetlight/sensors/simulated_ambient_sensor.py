from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from .base import AmbientSensor
from ..core.timeutil import now_local
from ..domain.errors import ValidationError


class SimulatedAmbientSensor(AmbientSensor):
    """Derives ambient light from the local clock, or from a pinned hour."""

    def __init__(
        self,
        sensor_id: str = "ambient_sim",
        clock: Callable[[], datetime] = now_local,
    ):
        self._sensor_id = sensor_id
        self._clock = clock
        self._mode = "clock"   # clock|manual
        self._manual_hour: Optional[int] = None

    @property
    def sensor_id(self) -> str:
        return self._sensor_id

    @property
    def mode(self) -> str:
        return self._mode

    def set_manual(self, hour: int) -> None:
        if isinstance(hour, bool) or not isinstance(hour, int):
            raise ValidationError(f"Hour must be an integer, got {hour!r}")
        if not 0 <= hour <= 23:
            raise ValidationError(f"Hour must be within 0..23, got {hour}")
        self._mode = "manual"
        self._manual_hour = hour

    def use_clock(self) -> None:
        self._mode = "clock"
        self._manual_hour = None

    def status(self) -> dict:
        return {
            "sensor_id": self._sensor_id,
            "mode": self._mode,
            "manual_hour": self._manual_hour,
            "hour": self.read_hour(),
        }

    def read_hour(self) -> int:
        if self._mode == "manual" and self._manual_hour is not None:
            return self._manual_hour
        return self._clock().hour
