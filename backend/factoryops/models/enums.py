import enum


class UserRole(str, enum.Enum):
    OPERATOR = "OPERATOR"
    MAINTENANCE = "MAINTENANCE"
    ENGINEER = "ENGINEER"
    ADMIN = "ADMIN"


class MachineStatus(str, enum.Enum):
    NORMAL = "NORMAL"
    WARNING = "WARNING"
    FAILURE = "FAILURE"
    MAINTENANCE = "MAINTENANCE"


class AnnotationType(str, enum.Enum):
    LINE = "LINE"
    RECTANGLE = "RECTANGLE"
    TEXT = "TEXT"
    CIRCLE = "CIRCLE"
    ARROW = "ARROW"


class EventType(str, enum.Enum):
    MACHINE_STATUS_CHANGE = "MACHINE_STATUS_CHANGE"
    ANNOTATION_CREATED = "ANNOTATION_CREATED"
    ANNOTATION_UPDATED = "ANNOTATION_UPDATED"
    ANNOTATION_DELETED = "ANNOTATION_DELETED"
    MESSAGE_SENT = "MESSAGE_SENT"
    USER_CONNECTED = "USER_CONNECTED"
    USER_DISCONNECTED = "USER_DISCONNECTED"
