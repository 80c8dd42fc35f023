"""Pydantic Schemas für ServiceType und ServiceTask"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.enums import ServiceTaskStatus
from app.utils.datetime_utils import to_local_naive
from app.utils.validators import Validators


class ServiceTypeCreate(BaseModel):
    """Schema für das Erstellen einer Serviceart"""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return Validators.validate_required_text(v, "Name")


class ServiceTypeResponse(ServiceTypeCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)


class ServiceTaskCreate(BaseModel):
    """Schema für das Erstellen eines Serviceeinsatzes"""
    start: datetime
    end: Optional[datetime] = None
    responsible: Optional[str] = Field(None, max_length=200)
    status: ServiceTaskStatus = ServiceTaskStatus.PENDING
    notes: Optional[str] = None
    space_id: int = Field(..., gt=0)
    service_type_id: int = Field(..., gt=0)
    event_id: Optional[int] = Field(None, gt=0)

    @field_validator('start', 'end')
    @classmethod
    def normalize_datetime(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(v)

    @model_validator(mode='after')
    def validate_period(self) -> "ServiceTaskCreate":
        if self.end is not None and self.end < self.start:
            raise ValueError("Ende darf nicht vor dem Beginn liegen")
        return self


class ServiceTaskStatusUpdate(BaseModel):
    """Schema für den Statuswechsel eines Serviceeinsatzes"""
    status: ServiceTaskStatus


class ServiceTaskResponse(BaseModel):
    """Schema für die Antwort"""
    id: int
    start: datetime
    end: Optional[datetime]
    responsible: Optional[str]
    status: ServiceTaskStatus
    notes: Optional[str]
    space_id: int
    service_type_id: int
    event_id: Optional[int]
    service_type_name: Optional[str] = None
    space_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_task(cls, task) -> "ServiceTaskResponse":
        response = cls.model_validate(task)
        response.service_type_name = task.service_type.name if task.service_type else None
        response.space_name = task.space.name if task.space else None
        return response
