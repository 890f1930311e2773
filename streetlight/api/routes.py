from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..core.config import settings
from ..core.timeutil import now_local
from ..domain.errors import NotFound, ValidationError
from ..domain.models import CommandResult, Notification
from ..sensors.simulated_ambient_sensor import SimulatedAmbientSensor
from ..services.runtime import FleetRuntime
from .schemas import AmbientManualRequest, BrightnessRequest, ToggleRequest

logger = logging.getLogger(__name__)

router = APIRouter()


# Overridden in main via app.dependency_overrides
def get_runtime() -> FleetRuntime:
    raise RuntimeError("Runtime dependency not configured")


def get_sim_ambient(rt: FleetRuntime = Depends(get_runtime)) -> SimulatedAmbientSensor:
    if not isinstance(rt.ctx.ambient, SimulatedAmbientSensor):
        raise HTTPException(status_code=409, detail="Ambient sensor is not simulated")
    return rt.ctx.ambient


def _note(n: Notification | None) -> dict | None:
    if n is None:
        return None
    return {
        "ts_utc": n.ts_utc.isoformat(),
        "message": n.message,
        "severity": n.severity,
        "light_id": n.light_id,
    }


def _result(res: CommandResult) -> dict:
    return {"ok": res.ok, "code": res.code, "notification": _note(res.notification)}


def _stats(rt: FleetRuntime) -> dict:
    s = rt.ctx.stats
    return {
        "total_lights": s.total_lights,
        "active_lights": s.active_lights,
        "maintenance_lights": s.maintenance_lights,
        "energy_used": round(s.energy_used, 3),
        "energy_saved": round(s.energy_saved, 3),
    }


def _environment(rt: FleetRuntime) -> dict | None:
    env = rt.ctx.environment
    if env is None:
        return None
    return {
        "ts_utc": env.ts_utc.isoformat(),
        "temperature_c": env.temperature_c,
        "visibility": env.visibility,
    }


@router.get("/live")
async def get_live(rt: FleetRuntime = Depends(get_runtime)):
    st = rt.autopilot.controller.state
    return {
        "app": settings.app_name,
        "now_local": now_local(rt.ctx.config.timezone).isoformat(),
        "stats": _stats(rt),
        "settings": rt.ctx.settings.as_dict(),
        "environment": _environment(rt),
        "controller": {
            "ticks": st.ticks,
            "last_tick_utc": st.last_tick_utc.isoformat() if st.last_tick_utc else None,
            "last_hour": st.last_hour,
            "last_dark": st.last_dark,
            "last_changed": st.last_changed,
        },
        "notifications": [_note(n) for n in rt.ctx.recent_notifications(5)],
    }


@router.get("/lights")
async def list_lights(rt: FleetRuntime = Depends(get_runtime)):
    return {"lights": [light.as_dict() for light in rt.ctx.registry.all()]}


@router.get("/lights/{light_id}")
async def get_light(light_id: int, rt: FleetRuntime = Depends(get_runtime)):
    try:
        return rt.ctx.registry.get(light_id).as_dict()
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/lights/all-on")
async def all_on(rt: FleetRuntime = Depends(get_runtime)):
    return _result(rt.commands.all_on())


@router.post("/lights/all-off")
async def all_off(rt: FleetRuntime = Depends(get_runtime)):
    return _result(rt.commands.all_off())


@router.post("/lights/{light_id}/toggle")
async def toggle_light(light_id: int, rt: FleetRuntime = Depends(get_runtime)):
    try:
        return _result(rt.commands.toggle_light(light_id))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/stats")
async def get_stats(rt: FleetRuntime = Depends(get_runtime)):
    return _stats(rt)


@router.get("/settings")
async def get_settings(rt: FleetRuntime = Depends(get_runtime)):
    return rt.ctx.settings.as_dict()


@router.put("/settings/brightness")
async def set_brightness(req: BrightnessRequest, rt: FleetRuntime = Depends(get_runtime)):
    try:
        return _result(rt.commands.set_master_brightness(req.value))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.put("/settings/auto-mode")
async def set_auto_mode(req: ToggleRequest, rt: FleetRuntime = Depends(get_runtime)):
    return _result(rt.commands.set_auto_mode(req.enabled))


@router.post("/settings/auto-mode/toggle")
async def toggle_auto_mode(rt: FleetRuntime = Depends(get_runtime)):
    return _result(rt.commands.toggle_auto_mode())


@router.put("/settings/motion-detection")
async def set_motion_detection(req: ToggleRequest, rt: FleetRuntime = Depends(get_runtime)):
    return _result(rt.commands.set_motion_detection(req.enabled))


@router.put("/settings/light-sensor")
async def set_light_sensor(req: ToggleRequest, rt: FleetRuntime = Depends(get_runtime)):
    return _result(rt.commands.set_light_sensor(req.enabled))


@router.get("/notifications")
async def notifications(limit: int = 20, rt: FleetRuntime = Depends(get_runtime)):
    return {"rows": [_note(n) for n in rt.ctx.recent_notifications(min(max(0, limit), 50))]}


@router.get("/environment")
async def environment(rt: FleetRuntime = Depends(get_runtime)):
    return {"environment": _environment(rt)}


# --- Simulation endpoints ---
@router.get("/sim/ambient")
async def ambient_status(sensor: SimulatedAmbientSensor = Depends(get_sim_ambient)):
    return sensor.status()


@router.post("/sim/ambient/manual")
async def ambient_manual(req: AmbientManualRequest, sensor: SimulatedAmbientSensor = Depends(get_sim_ambient)):
    try:
        sensor.set_manual(req.hour)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"ok": True, "mode": "manual", "hour": req.hour}


@router.post("/sim/ambient/clock")
async def ambient_clock(sensor: SimulatedAmbientSensor = Depends(get_sim_ambient)):
    sensor.use_clock()
    return {"ok": True, "mode": "clock"}
