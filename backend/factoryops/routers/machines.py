from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from factoryops.database import get_db
from factoryops.auth import require_manager, UserPrincipal
from factoryops.realtime.server import broadcast_machine_status
from factoryops.schemas.machine import (
    MachineCreate, MachineDeleteResponse, MachineDetail, MachineResponse, MachineStatusUpdate,
)
from factoryops.services.machine_service import machine_service

router = APIRouter()


@router.get("", response_model=list[MachineResponse])
async def list_machines(db: AsyncSession = Depends(get_db)):
    return await machine_service.list_all(db)


@router.get("/{machine_id}", response_model=MachineDetail)
async def get_machine(machine_id: str, db: AsyncSession = Depends(get_db)):
    return await machine_service.get(machine_id, db)


@router.post("", response_model=MachineResponse, status_code=201)
async def create_machine(
    body: MachineCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(require_manager),
):
    return await machine_service.create(body, db)


@router.patch("/{machine_id}/status", response_model=MachineResponse)
async def update_machine_status(
    machine_id: str,
    body: MachineStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Change status, audit it and push machineStatusChanged to every /machines client."""
    machine = await machine_service.update_status(machine_id, body.status, db)
    # Listeners may refetch on the event, so the change must be durable first
    await db.commit()
    await broadcast_machine_status(machine)
    return machine


@router.delete("/{machine_id}", response_model=MachineDeleteResponse)
async def delete_machine(
    machine_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(require_manager),
):
    return await machine_service.delete(machine_id, db)
