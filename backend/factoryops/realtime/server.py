import functools
import logging
import socketio
from pydantic import ValidationError
from factoryops.config import get_settings
from factoryops.exceptions import FactoryOpsError, InvalidInputError
from factoryops.schemas.common import dump
from factoryops.schemas.machine import MachineResponse

logger = logging.getLogger(__name__)

MACHINES_NAMESPACE = "/machines"
ANNOTATIONS_NAMESPACE = "/annotations"
CHAT_NAMESPACE = "/chat"

sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=get_settings().cors_origins,
)


def machine_room(machine_id: str) -> str:
    return f"machine:{machine_id}"


def chat_room(machine_id: str) -> str:
    return f"chat:{machine_id}"


def machine_id_from(data) -> str:
    """Join/leave payloads arrive either as the bare id or as {"machineId": ...}."""
    if isinstance(data, dict):
        data = data.get("machineId")
    if not isinstance(data, str) or not data:
        raise InvalidInputError("machineId is required")
    return data


def ack_errors(handler):
    """
    Wrap a socket event handler so domain and validation errors come back to the
    caller as an {"error": ...} ack instead of being dropped.
    """
    @functools.wraps(handler)
    async def wrapper(sid, *args):
        try:
            return await handler(sid, *args)
        except FactoryOpsError as e:
            logger.warning("%s from %s failed: %s", handler.__name__, sid, e.message)
            return {"error": e.message}
        except ValidationError as e:
            logger.warning("%s from %s rejected: %s", handler.__name__, sid, e)
            return {"error": str(e)}
    return wrapper


async def broadcast_machine_status(machine) -> dict:
    """Fan a machine (with its production line) out to every /machines client."""
    payload = dump(MachineResponse.model_validate(machine))
    await sio.emit("machineStatusChanged", payload, namespace=MACHINES_NAMESPACE)
    return payload


async def broadcast_to_machine_room(event: str, machine_id: str, payload) -> None:
    """Emit an annotation event to clients joined to that machine's annotation room only."""
    await sio.emit(event, payload, room=machine_room(machine_id), namespace=ANNOTATIONS_NAMESPACE)


async def broadcast_to_chat_room(event: str, machine_id: str, payload) -> None:
    await sio.emit(event, payload, room=chat_room(machine_id), namespace=CHAT_NAMESPACE)
