from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="STREETLIGHT_", extra="ignore")

    app_name: str = "Smart Street Light Control"
    timezone: str = "UTC"

    # Fleet
    fleet_size: int = Field(default=20, ge=1)
    random_seed: Optional[int] = None
    min_energy_rate: float = 10.0
    max_energy_rate: float = 60.0
    maintenance_backdate_days: int = 30
    initial_on_probability: float = 0.6
    initial_maintenance_probability: float = 0.1

    # Cadences
    control_interval_seconds: float = 3.0
    toggle_fault_interval_seconds: float = 10.0
    maintenance_fault_interval_seconds: float = 30.0
    environment_interval_seconds: float = 5.0
    motion_hold_seconds: float = 5.0

    # Simulated events
    motion_probability: float = 0.2
    toggle_fault_probability: float = 0.05
    toggle_fault_coin: float = 0.5
    maintenance_fault_probability: float = 0.02

    # Darkness rule, both bounds inclusive
    dark_from_hour: int = 18
    dark_until_hour: int = 6

    # Flat per-light ceiling for energy_saved
    energy_reference_watts: float = 50.0

    # Initial runtime settings
    auto_mode: bool = False
    motion_detection: bool = True
    light_sensor: bool = True
    master_brightness: int = Field(default=80, ge=1, le=100)

    # Logging
    log_level: str = "INFO"
    log_file: str = "streetlight.log"


settings = Settings()
