from sqlalchemy import Column, String, DateTime, Enum, ForeignKey, JSON
from sqlalchemy.orm import relationship
from factoryops.database import Base, new_id, utcnow
from factoryops.models.enums import AnnotationType


class Annotation(Base):
    __tablename__ = "annotations"

    id = Column(String(36), primary_key=True, default=new_id)
    type = Column(Enum(AnnotationType, native_enum=False, length=20), nullable=False)
    content = Column(JSON, nullable=False)  # shape geometry + style, opaque to the server
    machine_id = Column(String(36), ForeignKey("machines.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    machine = relationship("Machine", back_populates="annotations")
    user = relationship("User", back_populates="annotations")
