from sqlalchemy import Column, String, DateTime, Enum
from sqlalchemy.orm import relationship
from factoryops.database import Base, new_id, utcnow
from factoryops.models.enums import UserRole


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    password_hash = Column(String(100), nullable=False)
    role = Column(Enum(UserRole, native_enum=False, length=20), nullable=False, default=UserRole.OPERATOR)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    annotations = relationship("Annotation", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    chat_messages = relationship("ChatMessage", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    downtimes = relationship("Downtime", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
