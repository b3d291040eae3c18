from pydantic import Field
from datetime import datetime
from typing import Any, Optional
from factoryops.models.enums import AnnotationType
from factoryops.schemas.common import CamelModel
from factoryops.schemas.user import UserResponse


class AnnotationBase(CamelModel):
    id: str
    type: AnnotationType
    content: dict[str, Any]
    machine_id: str
    user_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AnnotationResponse(AnnotationBase):
    user: UserResponse


class AnnotationCreate(CamelModel):
    type: AnnotationType
    # Shape geometry and style; only checked to be an object, extra keys are kept
    content: dict[str, Any]
    machine_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)


class AnnotationUpdate(CamelModel):
    content: dict[str, Any]
