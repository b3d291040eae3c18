import logging
from sqlalchemy import select
from factoryops.database import session_scope
from factoryops.models.enums import EventType
from factoryops.models.machine import Machine
from factoryops.models.user import User
from factoryops.realtime.server import (
    sio, CHAT_NAMESPACE, ack_errors, broadcast_to_chat_room, chat_room, machine_id_from,
)
from factoryops.schemas.chat import ChatMessageResponse, MessageCreate
from factoryops.schemas.common import dump
from factoryops.services.chat_service import chat_service
from factoryops.services.event_log_service import event_log_service
from factoryops.services.machine_service import machine_service
from factoryops.services.user_service import user_service

logger = logging.getLogger(__name__)


async def _record_left_chats(user_id: str, machine_ids: list[str]) -> None:
    """USER_DISCONNECTED per chat; machines or users deleted since joining are skipped."""
    if not machine_ids:
        return
    async with session_scope() as db:
        if not await db.scalar(select(User.id).where(User.id == user_id)):
            return
        existing = set((await db.execute(select(Machine.id).where(Machine.id.in_(machine_ids)))).scalars().all())
        for machine_id in machine_ids:
            if machine_id not in existing:
                continue
            await event_log_service.record(
                EventType.USER_DISCONNECTED,
                "User left machine chat",
                db,
                machine_id=machine_id,
                user_id=user_id,
            )


@sio.on("connect", namespace=CHAT_NAMESPACE)
async def connect(sid, environ, auth=None):
    logger.info("Chat client connected: %s", sid)


@sio.on("disconnect", namespace=CHAT_NAMESPACE)
async def disconnect(sid, reason=None):
    """Write USER_DISCONNECTED for every chat the socket's user is still in."""
    session = await sio.get_session(sid, namespace=CHAT_NAMESPACE)
    logger.info("Chat client disconnected: %s", sid)
    user_id = session.get("userId")
    if user_id:
        await _record_left_chats(user_id, session.get("machineIds", []))


@sio.on("joinMachineChat", namespace=CHAT_NAMESPACE)
@ack_errors
async def join_machine_chat(sid, data=None):
    machine_id = machine_id_from(data)
    user_id = data.get("userId") if isinstance(data, dict) else None

    async with session_scope() as db:
        await machine_service.ensure_exists(machine_id, db)
        if user_id:
            await user_service.ensure_exists(user_id, db)
            await event_log_service.record(
                EventType.USER_CONNECTED,
                "User joined machine chat",
                db,
                machine_id=machine_id,
                user_id=user_id,
            )
        messages = await chat_service.history(machine_id, db)
        history = [dump(ChatMessageResponse.model_validate(m)) for m in messages]

    await sio.enter_room(sid, chat_room(machine_id), namespace=CHAT_NAMESPACE)
    if user_id:
        session = await sio.get_session(sid, namespace=CHAT_NAMESPACE)
        session["userId"] = user_id
        session.setdefault("machineIds", [])
        if machine_id not in session["machineIds"]:
            session["machineIds"].append(machine_id)
        await sio.save_session(sid, session, namespace=CHAT_NAMESPACE)

    await sio.emit("chatHistory", history, to=sid, namespace=CHAT_NAMESPACE)
    logger.info("%s joined chat for machine %s", sid, machine_id)
    return {"joined": machine_id}


@sio.on("leaveMachineChat", namespace=CHAT_NAMESPACE)
@ack_errors
async def leave_machine_chat(sid, data=None):
    machine_id = machine_id_from(data)
    await sio.leave_room(sid, chat_room(machine_id), namespace=CHAT_NAMESPACE)

    session = await sio.get_session(sid, namespace=CHAT_NAMESPACE)
    user_id = session.get("userId")
    if user_id and machine_id in session.get("machineIds", []):
        session["machineIds"].remove(machine_id)
        await sio.save_session(sid, session, namespace=CHAT_NAMESPACE)
        await _record_left_chats(user_id, [machine_id])
    return {"left": machine_id}


@sio.on("sendMessage", namespace=CHAT_NAMESPACE)
@ack_errors
async def send_message(sid, data=None):
    body = MessageCreate.model_validate(data)
    async with session_scope() as db:
        message = await chat_service.create(body, db)
        payload = dump(ChatMessageResponse.model_validate(message))

    await broadcast_to_chat_room("newMessage", body.machine_id, payload)
    return payload


@sio.on("userTyping", namespace=CHAT_NAMESPACE)
@ack_errors
async def user_typing(sid, data=None):
    machine_id = machine_id_from(data)
    await broadcast_to_chat_room(
        "userTyping",
        machine_id,
        {"machineId": machine_id, "userName": data.get("userName") if isinstance(data, dict) else None},
    )
