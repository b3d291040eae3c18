from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from factoryops.database import Base, new_id, utcnow


class Downtime(Base):
    __tablename__ = "downtimes"

    id = Column(String(36), primary_key=True, default=new_id)
    machine_id = Column(String(36), ForeignKey("machines.id", ondelete="CASCADE"), nullable=False, index=True)
    reason = Column(String(100), nullable=False)
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True))
    duration = Column(Integer)  # minutes, always derived from start_time/end_time
    notes = Column(Text)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    machine = relationship("Machine", back_populates="downtimes")
    user = relationship("User", back_populates="downtimes")
