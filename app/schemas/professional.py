"""Pydantic Schemas für Professional"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.validators import Validators


class ProfessionalBase(BaseModel):
    """Basis-Schema für Dienstleister"""
    name: str = Field(..., min_length=1, max_length=200)
    type: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None

    @field_validator('name', 'type')
    @classmethod
    def validate_required(cls, v: str) -> str:
        return Validators.validate_required_text(v)

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return Validators.validate_phone(v)


class ProfessionalCreate(ProfessionalBase):
    pass


class ProfessionalUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return Validators.validate_phone(v)


class ProfessionalResponse(ProfessionalBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
