from pydantic import Field
from datetime import datetime
from typing import Optional
from factoryops.schemas.common import CamelModel
from factoryops.schemas.user import UserResponse


class MessageCreate(CamelModel):
    content: str = Field(min_length=1)
    machine_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)


class ChatMessageResponse(CamelModel):
    id: str
    content: str
    machine_id: str
    user_id: str
    created_at: Optional[datetime] = None
    user: UserResponse
