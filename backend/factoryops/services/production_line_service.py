from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from factoryops.exceptions import NotFoundError
from factoryops.models.machine import Machine
from factoryops.models.production_line import ProductionLine


class ProductionLineService:
    async def list_all(self, db: AsyncSession) -> list[ProductionLine]:
        result = await db.execute(
            select(ProductionLine)
            .options(selectinload(ProductionLine.machines))
            .order_by(ProductionLine.name)
        )
        return list(result.scalars().all())

    async def get(self, line_id: str, db: AsyncSession) -> ProductionLine:
        result = await db.execute(
            select(ProductionLine)
            .where(ProductionLine.id == line_id)
            .options(selectinload(ProductionLine.machines).selectinload(Machine.annotations))
        )
        line = result.scalar_one_or_none()
        if not line:
            raise NotFoundError(f"Production line {line_id} not found")
        return line


production_line_service = ProductionLineService()
