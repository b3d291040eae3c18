from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from factoryops.database import get_db
from factoryops.schemas.downtime import DowntimeClose, DowntimeCreate, DowntimeResponse, DowntimeWithMachine
from factoryops.services.downtime_service import downtime_service

router = APIRouter()


@router.get("", response_model=list[DowntimeWithMachine])
async def list_downtimes(db: AsyncSession = Depends(get_db)):
    return await downtime_service.list_all(db)


@router.post("", response_model=DowntimeResponse, status_code=201)
async def create_downtime(body: DowntimeCreate, db: AsyncSession = Depends(get_db)):
    return await downtime_service.create(body, db)


@router.get("/machine/{machine_id}", response_model=list[DowntimeResponse])
async def list_machine_downtimes(machine_id: str, db: AsyncSession = Depends(get_db)):
    return await downtime_service.list_by_machine(machine_id, db)


@router.patch("/{downtime_id}/close", response_model=DowntimeResponse)
async def close_downtime(downtime_id: str, body: DowntimeClose, db: AsyncSession = Depends(get_db)):
    return await downtime_service.close(downtime_id, body.end_time, db)
