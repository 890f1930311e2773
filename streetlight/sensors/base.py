from __future__ import annotations

from abc import ABC, abstractmethod


class AmbientSensor(ABC):
    """Source of the hour-of-day that the darkness rule reads."""

    @property
    @abstractmethod
    def sensor_id(self) -> str:
        ...

    @abstractmethod
    def read_hour(self) -> int:
        """Return the current hour, 0..23. Raise on failure."""
        ...
