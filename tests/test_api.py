"""Tests for the HTTP adapter."""

import pytest
from fastapi.testclient import TestClient

import streetlight.api.routes as routes_module
from streetlight.main import app
from streetlight.services.runtime import FleetRuntime


@pytest.fixture
def runtime(mixed_ctx):
    return FleetRuntime(mixed_ctx)


@pytest.fixture
def client(runtime):
    previous = app.dependency_overrides.get(routes_module.get_runtime)
    app.dependency_overrides[routes_module.get_runtime] = lambda: runtime
    # No context manager: the lifespan (and its background loops) stays off
    yield TestClient(app)
    app.dependency_overrides[routes_module.get_runtime] = previous


def test_list_lights(client):
    resp = client.get("/api/lights")

    assert resp.status_code == 200
    lights = resp.json()["lights"]
    assert [light["id"] for light in lights] == [1, 2, 3, 4]
    assert lights[3]["needs_maintenance"] is True
    assert lights[0]["status"] == "ON"


def test_get_light_not_found(client):
    assert client.get("/api/lights/99").status_code == 404


def test_toggle_and_stats(client):
    resp = client.post("/api/lights/2/toggle")

    assert resp.json()["ok"] is True
    assert resp.json()["notification"]["message"] == "Light 2 turned ON"
    assert client.get("/api/stats").json()["active_lights"] == 4


def test_toggle_maintenance_light(client):
    body = client.post("/api/lights/4/toggle").json()

    assert body["ok"] is False
    assert body["code"] == "maintenance_blocked"
    assert body["notification"]["severity"] == "warning"


def test_toggle_unknown_light(client):
    assert client.post("/api/lights/77/toggle").status_code == 404


def test_bulk_commands(client):
    client.post("/api/lights/all-off")
    assert client.get("/api/stats").json()["active_lights"] == 1

    client.post("/api/lights/all-on")
    # The flagged light was already lit and stays lit
    assert client.get("/api/stats").json()["active_lights"] == 4


def test_brightness(client, runtime):
    ok = client.put("/api/settings/brightness", json={"value": 50})
    bad = client.put("/api/settings/brightness", json={"value": 150})

    assert ok.status_code == 200
    assert bad.status_code == 422
    assert runtime.ctx.settings.master_brightness == 50
    assert runtime.ctx.registry.get(1).brightness == 50


def test_settings_round_trip(client):
    client.put("/api/settings/motion-detection", json={"enabled": False})
    client.put("/api/settings/light-sensor", json={"enabled": False})
    client.post("/api/settings/auto-mode/toggle")

    assert client.get("/api/settings").json() == {
        "auto_mode": True,
        "motion_detection": False,
        "light_sensor": False,
        "master_brightness": 80,
    }

    body = client.put("/api/settings/auto-mode", json={"enabled": False}).json()
    assert body["notification"]["message"] == "Auto mode DISABLED"


def test_ambient_simulation(client, runtime):
    assert client.post("/api/sim/ambient/manual", json={"hour": 3}).json()["hour"] == 3
    assert client.get("/api/sim/ambient").json()["hour"] == 3
    assert client.post("/api/sim/ambient/manual", json={"hour": 30}).status_code == 422

    client.post("/api/sim/ambient/clock")
    assert runtime.ctx.ambient.mode == "clock"


def test_live_and_notifications(client, runtime):
    runtime.environment.sample()
    client.post("/api/lights/4/toggle")

    live = client.get("/api/live").json()
    assert live["stats"]["total_lights"] == 4
    assert live["environment"]["visibility"]
    assert live["notifications"][-1]["message"] == "Light 4 needs maintenance!"

    rows = client.get("/api/notifications", params={"limit": 1}).json()["rows"]
    assert len(rows) == 1


def test_live_clock_follows_fleet_timezone(client, runtime):
    runtime.ctx.config.timezone = "Asia/Tokyo"

    live = client.get("/api/live").json()

    assert live["now_local"].endswith("+09:00")
