from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Literal, Optional

Severity = Literal["info", "warning"]

MIN_BRIGHTNESS = 1
MAX_BRIGHTNESS = 100


class LightStatus(str, Enum):
    ON = "ON"
    OFF = "OFF"

    def flipped(self) -> "LightStatus":
        return LightStatus.OFF if self is LightStatus.ON else LightStatus.ON


@dataclass
class Light:
    id: int
    status: LightStatus
    brightness: int
    energy_rate: float  # max draw in watts
    last_maintenance_utc: datetime
    motion_detected: bool = False
    needs_maintenance: bool = False

    @property
    def is_on(self) -> bool:
        return self.status is LightStatus.ON

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "status": self.status.value,
            "brightness": self.brightness,
            "energy_rate": self.energy_rate,
            "last_maintenance_utc": self.last_maintenance_utc.isoformat(),
            "motion_detected": self.motion_detected,
            "needs_maintenance": self.needs_maintenance,
        }


@dataclass
class GlobalSettings:
    auto_mode: bool = False
    motion_detection: bool = True
    light_sensor: bool = True
    master_brightness: int = 80

    def as_dict(self) -> dict:
        return {
            "auto_mode": self.auto_mode,
            "motion_detection": self.motion_detection,
            "light_sensor": self.light_sensor,
            "master_brightness": self.master_brightness,
        }


@dataclass(frozen=True)
class FleetStats:
    total_lights: int
    active_lights: int
    maintenance_lights: int
    energy_used: float
    energy_saved: float


@dataclass(frozen=True)
class Notification:
    ts_utc: datetime
    message: str
    severity: Severity = "info"
    light_id: Optional[int] = None


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    code: str  # "ok" | "maintenance_blocked"
    notification: Optional[Notification] = None


@dataclass(frozen=True)
class EnvironmentReading:
    ts_utc: datetime
    temperature_c: int
    visibility: str
