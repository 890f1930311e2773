"""Tests for motion pulses and their timed clear."""

import asyncio

import pytest

from streetlight.services.motion import MotionTracker


def test_pulse_clears_after_hold(make_ctx):
    async def scenario():
        light = make_ctx(lights=[{}]).registry.get(1)
        tracker = MotionTracker(hold_seconds=0.05)

        tracker.pulse(light)
        during = light.motion_detected
        await asyncio.sleep(0.15)
        return during, light.motion_detected, tracker.pending()

    during, after, pending = asyncio.run(scenario())

    assert during is True
    assert after is False
    assert pending == 0


def test_newer_pulse_survives_older_clear(make_ctx):
    async def scenario():
        light = make_ctx(lights=[{}]).registry.get(1)
        tracker = MotionTracker(hold_seconds=0.1)

        first = tracker.pulse(light)
        await asyncio.sleep(0.06)
        second = tracker.pulse(light)
        # Past the first pulse's window, inside the second's
        await asyncio.sleep(0.06)
        mid = light.motion_detected
        await asyncio.sleep(0.1)
        return first, second, mid, light.motion_detected

    first, second, mid, end = asyncio.run(scenario())

    assert (first, second) == (1, 2)
    assert mid is True
    assert end is False


def test_stale_clear_is_ignored(make_ctx):
    async def scenario():
        light = make_ctx(lights=[{}]).registry.get(1)
        tracker = MotionTracker(hold_seconds=10)
        tracker.pulse(light)
        tracker.pulse(light)
        # A late callback from the first pulse must not clear the second
        tracker._clear(light, 1)
        still = light.motion_detected
        tracker.cancel_all()
        return still, tracker.generation(1)

    still, gen = asyncio.run(scenario())

    assert still is True
    assert gen == 2


def test_cancel_all_clears_flags(make_ctx):
    async def scenario():
        ctx = make_ctx(lights=[{}, {}])
        tracker = MotionTracker(hold_seconds=0.05)
        for light in ctx.registry.all():
            tracker.pulse(light)
        tracker.cancel_all()
        await asyncio.sleep(0.1)
        return [light.motion_detected for light in ctx.registry.all()], tracker.pending()

    flags, pending = asyncio.run(scenario())

    assert flags == [False, False]
    assert pending == 0


def test_pulse_without_loop_changes_nothing(make_ctx):
    light = make_ctx(lights=[{}]).registry.get(1)
    tracker = MotionTracker(hold_seconds=0.05)

    with pytest.raises(RuntimeError):
        tracker.pulse(light)

    assert light.motion_detected is False
    assert tracker.generation(1) == 0
    assert tracker.pending() == 0


def test_failed_pulse_keeps_earlier_clear(make_ctx):
    async def scenario():
        light = make_ctx(lights=[{}]).registry.get(1)
        tracker = MotionTracker(hold_seconds=0.05)
        tracker.pulse(light)
        # A tracker bound to a closed loop cannot schedule anything
        dead = asyncio.new_event_loop()
        dead.close()
        tracker._loop = dead
        with pytest.raises(RuntimeError):
            tracker.pulse(light)
        tracker._loop = None
        await asyncio.sleep(0.15)
        return light.motion_detected, tracker.generation(1)

    flag, gen = asyncio.run(scenario())

    assert flag is False
    assert gen == 1
