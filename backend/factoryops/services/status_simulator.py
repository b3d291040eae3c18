"""
Background status simulator.

A single repeating task: each tick picks one machine and one status uniformly at
random and pushes it through MachineService.update_status, so the change is audited
and broadcast exactly like an operator-driven one. The picked status may equal the
current one; that is still a (no-op) transition with its own audit row.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional
from sqlalchemy import select
from factoryops.database import session_scope
from factoryops.models.enums import MachineStatus
from factoryops.models.machine import Machine
from factoryops.services.machine_service import machine_service

logger = logging.getLogger(__name__)

OnChange = Callable[[Machine], Awaitable[None]]


class StatusSimulator:
    def __init__(self, interval_seconds: float, on_change: Optional[OnChange] = None,
                 rng: Optional[random.Random] = None):
        self.interval_seconds = interval_seconds
        self.on_change = on_change
        self.rng = rng or random.Random()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> Optional[Machine]:
        """Run one simulated change. Returns the updated machine, or None if there are no machines."""
        async with session_scope() as db:
            machine_ids = list((await db.execute(select(Machine.id).order_by(Machine.id))).scalars().all())
            if not machine_ids:
                return None
            machine_id = self.rng.choice(machine_ids)
            status = self.rng.choice(list(MachineStatus))
            machine = await machine_service.update_status(machine_id, status, db)

        if self.on_change:
            await self.on_change(machine)
        return machine

    async def run(self):
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.tick()
            except Exception:
                logger.exception("Status simulation tick failed")

    def start(self):
        if self.running:
            return
        logger.info("Status simulator started (every %.1fs)", self.interval_seconds)
        self._task = asyncio.create_task(self.run())

    async def stop(self):
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Status simulator stopped")
