import math
from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from factoryops.exceptions import ConflictError, InvalidInputError, NotFoundError
from factoryops.models.downtime import Downtime
from factoryops.schemas.downtime import DowntimeCreate
from factoryops.services.machine_service import machine_service
from factoryops.services.user_service import user_service


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything stored is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def compute_duration(start: datetime, end: datetime) -> int:
    """Whole minutes between start and end, floored."""
    start, end = as_utc(start), as_utc(end)
    if end < start:
        raise InvalidInputError("endTime must not be earlier than startTime")
    return math.floor((end - start).total_seconds() / 60)


class DowntimeService:
    async def list_all(self, db: AsyncSession) -> list[Downtime]:
        result = await db.execute(
            select(Downtime)
            .options(selectinload(Downtime.machine), selectinload(Downtime.user))
            .order_by(Downtime.start_time.desc())
        )
        return list(result.scalars().all())

    async def list_by_machine(self, machine_id: str, db: AsyncSession) -> list[Downtime]:
        result = await db.execute(
            select(Downtime)
            .where(Downtime.machine_id == machine_id)
            .options(selectinload(Downtime.user))
            .order_by(Downtime.start_time.desc())
        )
        return list(result.scalars().all())

    async def get(self, downtime_id: str, db: AsyncSession) -> Downtime:
        result = await db.execute(
            select(Downtime)
            .where(Downtime.id == downtime_id)
            .options(selectinload(Downtime.user))
            .execution_options(populate_existing=True)
        )
        downtime = result.scalar_one_or_none()
        if not downtime:
            raise NotFoundError(f"Downtime {downtime_id} not found")
        return downtime

    async def create(self, data: DowntimeCreate, db: AsyncSession) -> Downtime:
        await machine_service.ensure_exists(data.machine_id, db)
        await user_service.ensure_exists(data.user_id, db)

        # Duration is derived here only; a client-supplied value never reaches the row
        duration = None
        if data.end_time is not None:
            duration = compute_duration(data.start_time, data.end_time)

        downtime = Downtime(
            machine_id=data.machine_id,
            reason=data.reason,
            start_time=as_utc(data.start_time),
            end_time=as_utc(data.end_time) if data.end_time else None,
            duration=duration,
            notes=data.notes,
            user_id=data.user_id,
        )
        db.add(downtime)
        await db.flush()
        return await self.get(downtime.id, db)

    async def close(self, downtime_id: str, end_time: datetime, db: AsyncSession) -> Downtime:
        downtime = await self.get(downtime_id, db)
        if downtime.end_time is not None:
            raise ConflictError(f"Downtime {downtime_id} is already closed")

        downtime.duration = compute_duration(downtime.start_time, end_time)
        downtime.end_time = as_utc(end_time)
        await db.flush()
        return await self.get(downtime_id, db)


downtime_service = DowntimeService()
