"""Pydantic Schemas für Space"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.validators import Validators


class SpaceBase(BaseModel):
    """Basis-Schema für Räume"""
    name: str = Field(..., min_length=1, max_length=200)
    address: Optional[str] = Field(None, max_length=300)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)
    owner_name: Optional[str] = Field(None, max_length=200)
    owner_document: Optional[str] = Field(None, max_length=50)
    owner_role: Optional[str] = Field(None, max_length=100)
    contract_prefix: Optional[str] = Field(None, max_length=10)
    active: bool = True

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validiert den Namen"""
        return Validators.validate_required_text(v, "Name")

    @field_validator('contract_prefix')
    @classmethod
    def normalize_prefix(cls, v: Optional[str]) -> Optional[str]:
        """Präfix in Großbuchstaben, z.B. 'EST'"""
        v = Validators.optional_text(v)
        return v.upper() if v else None


class SpaceCreate(SpaceBase):
    """Schema für das Erstellen eines Raums"""
    pass


class SpaceUpdate(BaseModel):
    """Schema für das Aktualisieren eines Raums"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    address: Optional[str] = Field(None, max_length=300)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)
    owner_name: Optional[str] = Field(None, max_length=200)
    owner_document: Optional[str] = Field(None, max_length=50)
    owner_role: Optional[str] = Field(None, max_length=100)
    contract_prefix: Optional[str] = Field(None, max_length=10)
    active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return Validators.validate_required_text(v, "Name")


class SpaceResponse(SpaceBase):
    """Schema für die Antwort"""
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
