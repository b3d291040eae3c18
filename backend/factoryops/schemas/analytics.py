from typing import Optional
from factoryops.models.enums import MachineStatus
from factoryops.schemas.common import CamelModel


class StatusCount(CamelModel):
    status: MachineStatus
    count: int
    percentage: float


class StatusDistribution(CamelModel):
    total: int
    statuses: list[StatusCount]


class MachineDowntimeSummary(CamelModel):
    machine_id: str
    machine_name: str
    machine_code: str
    downtime_count: int
    closed_count: int
    open_count: int
    total_minutes: int
    mttr_minutes: float


class DowntimeSummary(CamelModel):
    machine_id: Optional[str] = None
    downtime_count: int
    total_minutes: int
    machines: list[MachineDowntimeSummary]
