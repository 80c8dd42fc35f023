"""Pydantic Schemas für Client"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.validators import Validators


class ClientBase(BaseModel):
    """Basis-Schema für Kunden"""
    name: str = Field(..., min_length=1, max_length=200)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=200)
    document: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=300)
    notes: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return Validators.validate_required_text(v, "Name")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return Validators.validate_email(v)

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return Validators.validate_phone(v)


class ClientCreate(ClientBase):
    """Schema für das Erstellen eines Kunden"""
    pass


class ClientUpdate(BaseModel):
    """Schema für das Aktualisieren eines Kunden"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=200)
    document: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=300)
    notes: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return Validators.validate_required_text(v, "Name")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return Validators.validate_email(v)

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return Validators.validate_phone(v)


class ClientResponse(ClientBase):
    """Schema für die Antwort"""
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
