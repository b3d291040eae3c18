from sqlalchemy import Column, String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from factoryops.database import Base, new_id, utcnow
from factoryops.models.enums import MachineStatus


class Machine(Base):
    __tablename__ = "machines"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    code = Column(String(50), unique=True, nullable=False, index=True)
    status = Column(Enum(MachineStatus, native_enum=False, length=20), nullable=False, default=MachineStatus.NORMAL)
    schema_image_url = Column(String(500))
    production_line_id = Column(String(36), ForeignKey("production_lines.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    production_line = relationship("ProductionLine", back_populates="machines")
    annotations = relationship(
        "Annotation",
        back_populates="machine",
        order_by="Annotation.created_at.desc()",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    chat_messages = relationship("ChatMessage", back_populates="machine", cascade="all, delete-orphan", passive_deletes=True)
    downtimes = relationship("Downtime", back_populates="machine", cascade="all, delete-orphan", passive_deletes=True)
