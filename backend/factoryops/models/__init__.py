from factoryops.models.enums import UserRole, MachineStatus, AnnotationType, EventType
from factoryops.models.user import User
from factoryops.models.production_line import ProductionLine
from factoryops.models.machine import Machine
from factoryops.models.annotation import Annotation
from factoryops.models.chat_message import ChatMessage
from factoryops.models.downtime import Downtime
from factoryops.models.event_log import EventLog

__all__ = ["UserRole", "MachineStatus", "AnnotationType", "EventType", "User", "ProductionLine",
           "Machine", "Annotation", "ChatMessage", "Downtime", "EventLog"]
