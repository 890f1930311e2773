from __future__ import annotations
import logging
import random
from collections import deque
from typing import Callable, Optional

from ..core.config import Settings, settings as default_settings
from ..core.timeutil import now_local, now_utc
from ..domain.models import EnvironmentReading, FleetStats, GlobalSettings, Notification, Severity
from ..domain.registry import LightRegistry
from ..domain.stats import compute_stats
from ..sensors.base import AmbientSensor
from ..sensors.simulated_ambient_sensor import SimulatedAmbientSensor
from .motion import MotionTracker

logger = logging.getLogger(__name__)

Subscriber = Callable[[Notification], None]


class FleetContext:
    """The single owner of fleet state, handed to every component."""

    def __init__(
        self,
        cfg: Settings = default_settings,
        rng: Optional[random.Random] = None,
        registry: Optional[LightRegistry] = None,
        ambient: Optional[AmbientSensor] = None,
        motion: Optional[MotionTracker] = None,
    ) -> None:
        self.config = cfg
        self.rng = rng or random.Random(cfg.random_seed)
        self.registry = registry or LightRegistry()
        self.settings = GlobalSettings(
            auto_mode=cfg.auto_mode,
            motion_detection=cfg.motion_detection,
            light_sensor=cfg.light_sensor,
            master_brightness=cfg.master_brightness,
        )
        self.ambient = ambient or SimulatedAmbientSensor(clock=lambda: now_local(cfg.timezone))
        self.motion = motion or MotionTracker(hold_seconds=cfg.motion_hold_seconds)
        self.environment: Optional[EnvironmentReading] = None
        self.notifications: deque[Notification] = deque(maxlen=50)
        self._subscribers: list[Subscriber] = []
        self.stats = self.refresh_stats()

    def refresh_stats(self) -> FleetStats:
        self.stats = compute_stats(self.registry.all(), self.config.energy_reference_watts)
        return self.stats

    def subscribe(self, fn: Subscriber) -> Callable[[], None]:
        self._subscribers.append(fn)

        def unsubscribe() -> None:
            if fn in self._subscribers:
                self._subscribers.remove(fn)

        return unsubscribe

    def publish(self, message: str, severity: Severity = "info", light_id: Optional[int] = None) -> Notification:
        note = Notification(ts_utc=now_utc(), message=message, severity=severity, light_id=light_id)
        self.notifications.append(note)
        for fn in list(self._subscribers):
            try:
                fn(note)
            except Exception:
                logger.exception("Notification subscriber failed")
        return note

    def recent_notifications(self, limit: int = 10) -> list[Notification]:
        return list(self.notifications)[-limit:] if limit > 0 else []


def build_context(cfg: Settings = default_settings) -> FleetContext:
    ctx = FleetContext(cfg)
    ctx.registry.create_fleet(cfg.fleet_size, ctx.rng, cfg)
    ctx.refresh_stats()
    return ctx
