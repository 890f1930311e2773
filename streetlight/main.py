from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .core.config import settings
from .core.log import configure_logging

from .api.routes import router as api_router
import streetlight.api.routes as routes_module

from .services.fleet import build_context
from .services.runtime import FleetRuntime


logger = logging.getLogger(__name__)


runtime: FleetRuntime | None = None


def get_runtime() -> FleetRuntime:
    assert runtime is not None
    return runtime


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Starting %s (fleet_size=%d tz=%s)", settings.app_name, settings.fleet_size, settings.timezone)

    global runtime
    runtime = FleetRuntime(build_context(settings))
    await runtime.start()

    try:
        yield
    finally:
        if runtime:
            await runtime.stop()

        logger.info("Shutdown complete")


app = FastAPI(title=settings.app_name, lifespan=lifespan)

# Make the dependency function in routes resolve to the real one
app.dependency_overrides[routes_module.get_runtime] = get_runtime

app.include_router(api_router, prefix="/api")
