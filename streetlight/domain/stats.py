from __future__ import annotations
from typing import Iterable

from .models import FleetStats, Light


def compute_stats(lights: Iterable[Light], reference_watts: float = 50.0) -> FleetStats:
    """Project the fleet into its aggregate numbers.

    energy_used sums rate * brightness/100 over lit lights. energy_saved is
    measured against a flat ``reference_watts`` ceiling per light, not each
    light's own rate.
    """
    total = 0
    active = 0
    maintenance = 0
    used = 0.0
    for light in lights:
        total += 1
        if light.needs_maintenance:
            maintenance += 1
        if light.is_on:
            active += 1
            used += light.energy_rate * light.brightness / 100.0
    return FleetStats(
        total_lights=total,
        active_lights=active,
        maintenance_lights=maintenance,
        energy_used=used,
        energy_saved=total * reference_watts - used,
    )
