from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from factoryops.database import get_db
from factoryops.services.analytics_service import analytics_service
from factoryops.schemas.analytics import DowntimeSummary, StatusDistribution

router = APIRouter()


@router.get("/status-distribution", response_model=StatusDistribution)
async def status_distribution(db: AsyncSession = Depends(get_db)):
    return await analytics_service.get_status_distribution(db)


@router.get("/downtime-summary", response_model=DowntimeSummary)
async def downtime_summary(
    machine_id: Optional[str] = Query(None, alias="machineId"),
    db: AsyncSession = Depends(get_db),
):
    return await analytics_service.get_downtime_summary(db, machine_id)
