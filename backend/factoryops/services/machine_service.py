import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from factoryops.config import get_settings
from factoryops.exceptions import ConflictError, NotFoundError
from factoryops.models.annotation import Annotation
from factoryops.models.enums import EventType, MachineStatus
from factoryops.models.machine import Machine
from factoryops.models.production_line import ProductionLine
from factoryops.schemas.machine import MachineCreate
from factoryops.services.event_log_service import event_log_service

logger = logging.getLogger(__name__)


class MachineService:
    async def list_all(self, db: AsyncSession) -> list[Machine]:
        result = await db.execute(
            select(Machine).options(selectinload(Machine.production_line)).order_by(Machine.name)
        )
        return list(result.scalars().all())

    async def get(self, machine_id: str, db: AsyncSession) -> Machine:
        """Machine with its production line and annotations (newest first, with creators)."""
        result = await db.execute(
            select(Machine)
            .where(Machine.id == machine_id)
            .options(
                selectinload(Machine.production_line),
                selectinload(Machine.annotations).selectinload(Annotation.user),
            )
            .execution_options(populate_existing=True)
        )
        machine = result.scalar_one_or_none()
        if not machine:
            raise NotFoundError(f"Machine {machine_id} not found")
        return machine

    async def get_with_line(self, machine_id: str, db: AsyncSession) -> Machine:
        result = await db.execute(
            select(Machine)
            .where(Machine.id == machine_id)
            .options(selectinload(Machine.production_line))
            .execution_options(populate_existing=True)
        )
        machine = result.scalar_one_or_none()
        if not machine:
            raise NotFoundError(f"Machine {machine_id} not found")
        return machine

    async def ensure_exists(self, machine_id: str, db: AsyncSession) -> None:
        if not await db.scalar(select(Machine.id).where(Machine.id == machine_id)):
            raise NotFoundError(f"Machine {machine_id} not found")

    async def create(self, data: MachineCreate, db: AsyncSession) -> Machine:
        if not await db.get(ProductionLine, data.production_line_id):
            raise NotFoundError(f"Production line {data.production_line_id} not found")
        if await db.scalar(select(Machine.id).where(Machine.code == data.code)):
            raise ConflictError(f"Machine code {data.code} already exists")

        machine = Machine(**data.model_dump())
        db.add(machine)
        await db.flush()
        return await self.get_with_line(machine.id, db)

    async def update_status(self, machine_id: str, status: MachineStatus, db: AsyncSession) -> Machine:
        """
        Set a machine's status and append a MACHINE_STATUS_CHANGE audit row.

        The old status is read before the update so the audit metadata carries the
        pre-image. A no-op transition (same status) is still audited.
        """
        status = MachineStatus(status)
        machine = await self.get_with_line(machine_id, db)
        old_status = machine.status
        machine.status = status
        await db.flush()
        if not get_settings().audit_is_atomic:
            await db.commit()

        await event_log_service.record(
            EventType.MACHINE_STATUS_CHANGE,
            f"Machine {machine.name} status changed to {status.value}",
            db,
            machine_id=machine.id,
            metadata={"oldStatus": old_status.value, "newStatus": status.value},
        )
        logger.debug("Machine %s: %s -> %s", machine.code, old_status.value, status.value)
        return await self.get_with_line(machine_id, db)

    async def delete(self, machine_id: str, db: AsyncSession) -> dict:
        machine = await db.get(Machine, machine_id)
        if not machine:
            raise NotFoundError(f"Machine {machine_id} not found")
        name, code = machine.name, machine.code

        await db.delete(machine)
        await db.flush()
        if not get_settings().audit_is_atomic:
            await db.commit()

        # The machine row is gone, so the audit entry carries its identity in metadata only
        await event_log_service.record(
            EventType.MACHINE_STATUS_CHANGE,
            f"Machine {name} ({code}) was deleted",
            db,
            metadata={
                "action": "DELETE",
                "machineName": name,
                "machineCode": code,
                "deletedMachineId": machine_id,
            },
        )
        return {"success": True, "message": f"Machine {code} deleted"}


machine_service = MachineService()
