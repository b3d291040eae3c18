from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from factoryops.database import get_db
from factoryops.schemas.production_line import ProductionLineResponse, ProductionLineDetail
from factoryops.services.production_line_service import production_line_service

router = APIRouter()


@router.get("", response_model=list[ProductionLineResponse])
async def list_production_lines(db: AsyncSession = Depends(get_db)):
    return await production_line_service.list_all(db)


@router.get("/{line_id}", response_model=ProductionLineDetail)
async def get_production_line(line_id: str, db: AsyncSession = Depends(get_db)):
    return await production_line_service.get(line_id, db)
