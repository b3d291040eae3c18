from pydantic import Field
from datetime import datetime
from typing import Optional
from factoryops.models.enums import MachineStatus
from factoryops.schemas.common import CamelModel
from factoryops.schemas.annotation import AnnotationBase, AnnotationResponse


class ProductionLineInfo(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MachineBrief(CamelModel):
    id: str
    name: str
    code: str


class MachineSummary(CamelModel):
    id: str
    name: str
    code: str
    status: MachineStatus
    schema_image_url: Optional[str] = None
    production_line_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MachineResponse(MachineSummary):
    production_line: ProductionLineInfo


class MachineDetail(MachineResponse):
    annotations: list[AnnotationResponse] = []


class MachineWithAnnotations(MachineSummary):
    annotations: list[AnnotationBase] = []


class MachineCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    code: str = Field(min_length=1, max_length=50)
    status: MachineStatus = MachineStatus.NORMAL
    production_line_id: str = Field(min_length=1)
    schema_image_url: Optional[str] = None


class MachineStatusUpdate(CamelModel):
    status: MachineStatus


class MachineDeleteResponse(CamelModel):
    success: bool
    message: str
