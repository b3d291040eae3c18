from pydantic import Field
from datetime import datetime
from typing import Optional
from factoryops.schemas.common import CamelModel
from factoryops.schemas.user import UserBrief
from factoryops.schemas.machine import MachineBrief


class DowntimeCreate(CamelModel):
    machine_id: str = Field(min_length=1)
    reason: str = Field(min_length=1, max_length=100)
    start_time: datetime
    end_time: Optional[datetime] = None
    notes: Optional[str] = None
    user_id: str = Field(min_length=1)


class DowntimeClose(CamelModel):
    end_time: datetime


class DowntimeResponse(CamelModel):
    id: str
    machine_id: str
    reason: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: Optional[int] = None
    notes: Optional[str] = None
    user_id: str
    created_at: Optional[datetime] = None
    user: UserBrief


class DowntimeWithMachine(DowntimeResponse):
    machine: MachineBrief
