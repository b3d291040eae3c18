import asyncio
import random
from unittest.mock import AsyncMock
import pytest
from factoryops.models.enums import EventType, MachineStatus
from factoryops.services.status_simulator import StatusSimulator
from conftest import fetch_events, fetch_machine


async def test_tick_without_machines_does_nothing(socket_io):
    on_change = AsyncMock()
    simulator = StatusSimulator(1.0, on_change=on_change, rng=random.Random(1))

    assert await simulator.tick() is None
    on_change.assert_not_awaited()
    assert await fetch_events() == []


async def test_tick_updates_one_machine_and_audits(make_machine):
    await make_machine(machine_id="M1", code="RW-001")
    await make_machine(machine_id="M2", code="RW-002")
    on_change = AsyncMock()
    simulator = StatusSimulator(1.0, on_change=on_change, rng=random.Random(42))

    machine = await simulator.tick()

    assert machine.id in ("M1", "M2")
    assert machine.status in list(MachineStatus)
    assert machine.production_line.id == "L1"
    on_change.assert_awaited_once_with(machine)

    stored = await fetch_machine(machine.id)
    assert stored.status == machine.status

    events = await fetch_events(EventType.MACHINE_STATUS_CHANGE)
    assert len(events) == 1
    assert events[0].machine_id == machine.id
    assert events[0].event_metadata == {"oldStatus": "NORMAL", "newStatus": machine.status.value}


async def test_seeded_rng_is_deterministic(make_machine):
    await make_machine(machine_id="M1", code="RW-001")
    await make_machine(machine_id="M2", code="RW-002")

    first = await StatusSimulator(1.0, rng=random.Random(7)).tick()
    second = await StatusSimulator(1.0, rng=random.Random(7)).tick()

    assert first.id == second.id
    assert first.status == second.status


async def test_run_survives_failing_tick():
    simulator = StatusSimulator(0)
    simulator.tick = AsyncMock(side_effect=[RuntimeError("db gone"), None, asyncio.CancelledError()])

    with pytest.raises(asyncio.CancelledError):
        await simulator.run()

    assert simulator.tick.await_count == 3


async def test_start_and_stop():
    simulator = StatusSimulator(60)
    simulator.start()
    assert simulator.running

    await simulator.stop()
    assert not simulator.running
