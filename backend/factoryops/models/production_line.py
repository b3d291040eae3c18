from sqlalchemy import Column, String, Text, Boolean, DateTime
from sqlalchemy.orm import relationship
from factoryops.database import Base, new_id, utcnow


class ProductionLine(Base):
    __tablename__ = "production_lines"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    machines = relationship("Machine", back_populates="production_line", order_by="Machine.name")
