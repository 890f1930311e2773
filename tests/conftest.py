"""Shared fixtures: hand-built fleets and a scripted random source."""

import random

import pytest

from streetlight.core.config import Settings
from streetlight.domain.models import LightStatus
from streetlight.sensors.simulated_ambient_sensor import SimulatedAmbientSensor
from streetlight.services.fleet import FleetContext


class ScriptedRandom(random.Random):
    """random() replays ``values`` then returns ``default``; choice() picks index ``pick``."""

    def __init__(self, values=(), default=0.99, pick=0):
        super().__init__(0)
        self._values = list(values)
        self._default = default
        self._pick = pick

    def random(self):
        if self._values:
            return self._values.pop(0)
        return self._default

    def choice(self, seq):
        return seq[self._pick % len(seq)]


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def make_ctx():
    """Build a context around explicit lights.

    Each light is a dict of LightRegistry.add keyword arguments; ``status``
    may be given as "ON"/"OFF".
    """

    def _make(lights=(), rng=None, hour=None, **overrides):
        cfg = Settings(log_file="", random_seed=7, **overrides)
        ambient = SimulatedAmbientSensor()
        if hour is not None:
            ambient.set_manual(hour)
        ctx = FleetContext(cfg, rng=rng or ScriptedRandom(), ambient=ambient)
        for kwargs in lights:
            kwargs = {"energy_rate": 20.0, **kwargs}
            if isinstance(kwargs.get("status"), str):
                kwargs["status"] = LightStatus(kwargs["status"])
            ctx.registry.add(**kwargs)
        ctx.refresh_stats()
        return ctx

    return _make


@pytest.fixture
def mixed_ctx(make_ctx):
    """Four lights: two on, one off, one on but flagged for maintenance."""
    return make_ctx(
        lights=[
            {"status": "ON", "brightness": 40, "energy_rate": 10.0},
            {"status": "OFF", "brightness": 70, "energy_rate": 20.0},
            {"status": "ON", "brightness": 90, "energy_rate": 30.0},
            {"status": "ON", "brightness": 55, "energy_rate": 40.0, "needs_maintenance": True},
        ]
    )
