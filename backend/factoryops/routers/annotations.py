from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from factoryops.database import get_db
from factoryops.realtime.server import broadcast_to_machine_room
from factoryops.schemas.annotation import AnnotationCreate, AnnotationResponse, AnnotationUpdate
from factoryops.schemas.common import dump
from factoryops.services.annotation_service import annotation_service

router = APIRouter()


@router.get("/machine/{machine_id}", response_model=list[AnnotationResponse])
async def list_machine_annotations(machine_id: str, db: AsyncSession = Depends(get_db)):
    return await annotation_service.list_by_machine(machine_id, db)


@router.post("", response_model=AnnotationResponse, status_code=201)
async def create_annotation(body: AnnotationCreate, db: AsyncSession = Depends(get_db)):
    annotation = await annotation_service.create(body, db)
    response = AnnotationResponse.model_validate(annotation)
    # Committed before the room hears about it
    await db.commit()
    await broadcast_to_machine_room("annotationCreated", annotation.machine_id, dump(response))
    return response


@router.put("/{annotation_id}", response_model=AnnotationResponse)
async def update_annotation(
    annotation_id: str,
    body: AnnotationUpdate,
    db: AsyncSession = Depends(get_db),
):
    annotation = await annotation_service.update(annotation_id, body.content, db)
    response = AnnotationResponse.model_validate(annotation)
    await db.commit()
    await broadcast_to_machine_room("annotationUpdated", annotation.machine_id, dump(response))
    return response


@router.delete("/{annotation_id}", response_model=AnnotationResponse)
async def delete_annotation(annotation_id: str, db: AsyncSession = Depends(get_db)):
    annotation = await annotation_service.delete(annotation_id, db)
    response = AnnotationResponse.model_validate(annotation)
    await db.commit()
    await broadcast_to_machine_room("annotationDeleted", annotation.machine_id, annotation_id)
    return response
