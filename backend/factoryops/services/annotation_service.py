from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from factoryops.config import get_settings
from factoryops.exceptions import NotFoundError
from factoryops.models.annotation import Annotation
from factoryops.models.enums import EventType
from factoryops.schemas.annotation import AnnotationCreate
from factoryops.services.event_log_service import event_log_service
from factoryops.services.machine_service import machine_service
from factoryops.services.user_service import user_service


class AnnotationService:
    async def list_by_machine(self, machine_id: str, db: AsyncSession) -> list[Annotation]:
        result = await db.execute(
            select(Annotation)
            .where(Annotation.machine_id == machine_id)
            .options(selectinload(Annotation.user))
            .order_by(Annotation.created_at.desc())
        )
        return list(result.scalars().all())

    async def get(self, annotation_id: str, db: AsyncSession) -> Annotation:
        result = await db.execute(
            select(Annotation)
            .where(Annotation.id == annotation_id)
            .options(selectinload(Annotation.user))
            .execution_options(populate_existing=True)
        )
        annotation = result.scalar_one_or_none()
        if not annotation:
            raise NotFoundError(f"Annotation {annotation_id} not found")
        return annotation

    async def create(self, data: AnnotationCreate, db: AsyncSession) -> Annotation:
        await machine_service.ensure_exists(data.machine_id, db)
        await user_service.ensure_exists(data.user_id, db)

        annotation = Annotation(
            type=data.type,
            content=data.content,
            machine_id=data.machine_id,
            user_id=data.user_id,
        )
        db.add(annotation)
        await db.flush()

        await event_log_service.record(
            EventType.ANNOTATION_CREATED,
            "Annotation created on machine",
            db,
            machine_id=data.machine_id,
            user_id=data.user_id,
            metadata={"annotationId": annotation.id, "type": data.type.value},
        )
        return await self.get(annotation.id, db)

    async def update(self, annotation_id: str, content: dict, db: AsyncSession) -> Annotation:
        annotation = await self.get(annotation_id, db)
        annotation.content = content
        await db.flush()
        return await self.get(annotation_id, db)

    async def delete(self, annotation_id: str, db: AsyncSession) -> Annotation:
        """Delete an annotation; the audit row uses the machine and user it had before deletion."""
        annotation = await self.get(annotation_id, db)
        machine_id, user_id = annotation.machine_id, annotation.user_id

        await event_log_service.record(
            EventType.ANNOTATION_DELETED,
            "Annotation deleted",
            db,
            machine_id=machine_id,
            user_id=user_id,
            metadata={"annotationId": annotation_id, "type": annotation.type.value},
        )
        if not get_settings().audit_is_atomic:
            await db.commit()

        await db.delete(annotation)
        await db.flush()
        return annotation


annotation_service = AnnotationService()
