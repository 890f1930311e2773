from __future__ import annotations
import logging
import random
from datetime import datetime, timedelta
from typing import Iterator, Optional

from .errors import NotFound
from .models import Light, LightStatus, MAX_BRIGHTNESS, MIN_BRIGHTNESS
from ..core.config import Settings, settings as default_settings
from ..core.timeutil import now_utc

logger = logging.getLogger(__name__)


class LightRegistry:
    """Owns every Light. Ids are assigned here, densely from 1, and never reused."""

    def __init__(self) -> None:
        self._lights: dict[int, Light] = {}

    def __len__(self) -> int:
        return len(self._lights)

    def __iter__(self) -> Iterator[Light]:
        return iter(self.all())

    def add(
        self,
        energy_rate: float,
        status: LightStatus = LightStatus.OFF,
        brightness: int = MAX_BRIGHTNESS,
        last_maintenance_utc: Optional[datetime] = None,
        needs_maintenance: bool = False,
    ) -> Light:
        light = Light(
            id=len(self._lights) + 1,
            status=status,
            brightness=max(MIN_BRIGHTNESS, min(MAX_BRIGHTNESS, int(brightness))),
            energy_rate=float(energy_rate),
            last_maintenance_utc=last_maintenance_utc or now_utc(),
            needs_maintenance=needs_maintenance,
        )
        self._lights[light.id] = light
        return light

    def create_fleet(
        self,
        n: int,
        rng: random.Random,
        cfg: Settings = default_settings,
    ) -> list[Light]:
        now = now_utc()
        backdate_s = cfg.maintenance_backdate_days * 24 * 3600
        created = []
        for _ in range(n):
            created.append(
                self.add(
                    status=LightStatus.ON if rng.random() < cfg.initial_on_probability else LightStatus.OFF,
                    brightness=rng.randint(MIN_BRIGHTNESS, MAX_BRIGHTNESS),
                    energy_rate=rng.uniform(cfg.min_energy_rate, cfg.max_energy_rate),
                    last_maintenance_utc=now - timedelta(seconds=rng.random() * backdate_s),
                    needs_maintenance=rng.random() < cfg.initial_maintenance_probability,
                )
            )
        flagged = sum(1 for light in created if light.needs_maintenance)
        logger.info("Fleet created: %d lights (%d flagged for maintenance)", n, flagged)
        return created

    def get(self, light_id: int) -> Light:
        try:
            return self._lights[light_id]
        except KeyError:
            raise NotFound(light_id) from None

    def all(self) -> list[Light]:
        # dict preserves insertion order and ids are assigned in that order
        return list(self._lights.values())

    def functional(self) -> list[Light]:
        return [light for light in self._lights.values() if not light.needs_maintenance]
