from __future__ import annotations
import logging

from ..domain.controller import AutonomousController
from .autopilot import AutopilotService
from .commands import CommandService
from .environment import EnvironmentFeed
from .fleet import FleetContext
from .periodic import PeriodicTask
from .simulator import EventSimulator

logger = logging.getLogger(__name__)


class FleetRuntime:
    """Wires the services around one context and owns their periodic loops."""

    def __init__(self, ctx: FleetContext) -> None:
        cfg = ctx.config
        self.ctx = ctx
        self.commands = CommandService(ctx)
        self.autopilot = AutopilotService(
            ctx, AutonomousController(dark_from=cfg.dark_from_hour, dark_until=cfg.dark_until_hour)
        )
        self.simulator = EventSimulator(ctx)
        self.environment = EnvironmentFeed(ctx)

        self.tasks = [
            PeriodicTask("auto_control", cfg.control_interval_seconds, self.autopilot.tick),
            PeriodicTask("toggle_faults", cfg.toggle_fault_interval_seconds, self.simulator.random_toggle_fault),
            PeriodicTask("maintenance_faults", cfg.maintenance_fault_interval_seconds,
                         self.simulator.random_maintenance_fault),
            PeriodicTask("environment", cfg.environment_interval_seconds, self.environment.sample),
        ]

    async def start(self) -> None:
        self.environment.sample()
        for task in self.tasks:
            await task.start()
        logger.info("Fleet runtime started (%d lights)", len(self.ctx.registry))

    async def stop(self) -> None:
        for task in self.tasks:
            await task.stop()
        self.ctx.motion.cancel_all()
        logger.info("Fleet runtime stopped")
