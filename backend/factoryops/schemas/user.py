from pydantic import Field
from datetime import datetime
from typing import Optional
from factoryops.models.enums import UserRole
from factoryops.schemas.common import CamelModel


class UserBrief(CamelModel):
    id: str
    name: str


class UserResponse(CamelModel):
    id: str
    username: str
    name: str
    role: UserRole
    created_at: Optional[datetime] = None


class UserCreate(CamelModel):
    username: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=200)
    password: str = Field(min_length=6)
    role: UserRole


class UserUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    password: Optional[str] = Field(default=None, min_length=6)
    role: Optional[UserRole] = None
