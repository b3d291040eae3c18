from sqlalchemy import Column, String, Text, DateTime, Enum, ForeignKey, JSON
from factoryops.database import Base, new_id, utcnow
from factoryops.models.enums import EventType


class EventLog(Base):
    __tablename__ = "event_logs"

    id = Column(String(36), primary_key=True, default=new_id)
    event_type = Column(Enum(EventType, native_enum=False, length=40), nullable=False, index=True)
    description = Column(Text)
    # "metadata" is reserved on declarative classes
    event_metadata = Column("metadata", JSON)
    machine_id = Column(String(36), ForeignKey("machines.id", ondelete="SET NULL"), index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), index=True)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
