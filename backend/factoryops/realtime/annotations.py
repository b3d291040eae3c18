import logging
from factoryops.database import session_scope
from factoryops.exceptions import InvalidInputError
from factoryops.realtime.server import (
    sio, ANNOTATIONS_NAMESPACE, ack_errors, broadcast_to_machine_room, machine_id_from, machine_room,
)
from factoryops.schemas.annotation import AnnotationCreate, AnnotationResponse, AnnotationUpdate
from factoryops.schemas.common import dump
from factoryops.services.annotation_service import annotation_service

logger = logging.getLogger(__name__)


def _annotation_id(data) -> str:
    annotation_id = data.get("id") if isinstance(data, dict) else None
    if not isinstance(annotation_id, str) or not annotation_id:
        raise InvalidInputError("id is required")
    return annotation_id


@sio.on("connect", namespace=ANNOTATIONS_NAMESPACE)
async def connect(sid, environ, auth=None):
    logger.info("Annotations client connected: %s", sid)


@sio.on("disconnect", namespace=ANNOTATIONS_NAMESPACE)
async def disconnect(sid, reason=None):
    logger.info("Annotations client disconnected: %s", sid)


@sio.on("joinMachine", namespace=ANNOTATIONS_NAMESPACE)
@ack_errors
async def join_machine(sid, data=None):
    machine_id = machine_id_from(data)
    await sio.enter_room(sid, machine_room(machine_id), namespace=ANNOTATIONS_NAMESPACE)
    logger.info("%s joined annotations for machine %s", sid, machine_id)
    return {"joined": machine_id}


@sio.on("leaveMachine", namespace=ANNOTATIONS_NAMESPACE)
@ack_errors
async def leave_machine(sid, data=None):
    machine_id = machine_id_from(data)
    await sio.leave_room(sid, machine_room(machine_id), namespace=ANNOTATIONS_NAMESPACE)
    return {"left": machine_id}


@sio.on("createAnnotation", namespace=ANNOTATIONS_NAMESPACE)
@ack_errors
async def create_annotation(sid, data=None):
    body = AnnotationCreate.model_validate(data)
    async with session_scope() as db:
        annotation = await annotation_service.create(body, db)
        payload = dump(AnnotationResponse.model_validate(annotation))

    await broadcast_to_machine_room("annotationCreated", body.machine_id, payload)
    return payload


@sio.on("updateAnnotation", namespace=ANNOTATIONS_NAMESPACE)
@ack_errors
async def update_annotation(sid, data=None):
    annotation_id = _annotation_id(data)
    body = AnnotationUpdate.model_validate(data)
    async with session_scope() as db:
        annotation = await annotation_service.update(annotation_id, body.content, db)
        payload = dump(AnnotationResponse.model_validate(annotation))

    await broadcast_to_machine_room("annotationUpdated", payload["machineId"], payload)
    return payload


@sio.on("deleteAnnotation", namespace=ANNOTATIONS_NAMESPACE)
@ack_errors
async def delete_annotation(sid, data=None):
    annotation_id = _annotation_id(data)
    async with session_scope() as db:
        annotation = await annotation_service.delete(annotation_id, db)
        machine_id = annotation.machine_id

    await broadcast_to_machine_room("annotationDeleted", machine_id, annotation_id)
    return {"id": annotation_id}
