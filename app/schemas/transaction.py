"""Pydantic Schemas für Transaction"""
import datetime as dt
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.enums import (
    TransactionType,
    TransactionStatus,
    TransactionCategory,
    CATEGORIES_BY_TYPE,
)
from app.utils.validators import Validators


def check_category_for_type(transaction_type: TransactionType, category: TransactionCategory) -> None:
    """
    Prüft, ob die Kategorie zum Typ passt (z.B. 'cleaning' nur für Ausgaben).

    Raises:
        ValueError: Bei unpassender Kategorie
    """
    if category not in CATEGORIES_BY_TYPE[transaction_type]:
        raise ValueError(
            f"Kategorie '{category.value}' ist für Typ '{transaction_type.value}' nicht erlaubt"
        )


class TransactionCreate(BaseModel):
    """Schema für das Erstellen einer Einnahme/Ausgabe"""
    type: TransactionType
    category: TransactionCategory
    description: str = Field(..., min_length=1, max_length=300)
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    date: dt.date
    status: TransactionStatus = TransactionStatus.PAID
    paid_at: Optional[dt.datetime] = None
    notes: Optional[str] = None
    event_id: Optional[int] = Field(None, gt=0)
    service_task_id: Optional[int] = Field(None, gt=0)

    model_config = ConfigDict(extra="forbid")

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: str) -> str:
        """Validiert die Beschreibung"""
        return Validators.validate_required_text(v, "Beschreibung")

    @field_validator('event_id', 'service_task_id', mode='before')
    @classmethod
    def empty_str_to_none(cls, v):
        """Konvertiert leere Strings zu None"""
        if isinstance(v, str) and v.strip() == '':
            return None
        return v

    @model_validator(mode='after')
    def validate_transaction(self) -> "TransactionCreate":
        """Kategorie passend zum Typ; paid_at nur bei bezahlten Buchungen"""
        check_category_for_type(self.type, self.category)
        if self.status == TransactionStatus.PENDING:
            self.paid_at = None
        return self


class TransactionUpdate(BaseModel):
    """
    Schema für das Aktualisieren einer Einnahme/Ausgabe.

    Typ/Kategorie werden nach dem Zusammenführen mit dem gespeicherten
    Datensatz im Service geprüft.
    """
    type: Optional[TransactionType] = None
    category: Optional[TransactionCategory] = None
    description: Optional[str] = Field(None, min_length=1, max_length=300)
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    date: Optional[dt.date] = None
    status: Optional[TransactionStatus] = None
    paid_at: Optional[dt.datetime] = None
    notes: Optional[str] = None
    event_id: Optional[int] = Field(None, gt=0)
    service_task_id: Optional[int] = Field(None, gt=0)

    model_config = ConfigDict(extra="forbid")

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return Validators.validate_required_text(v, "Beschreibung")


class TransactionStatusUpdate(BaseModel):
    """Schema für 'als bezahlt/offen markieren'"""
    status: TransactionStatus
    paid_at: Optional[dt.datetime] = None


class TransactionResponse(BaseModel):
    """Schema für die Antwort"""
    id: int
    type: TransactionType
    category: TransactionCategory
    description: str
    amount: Decimal
    date: dt.date
    status: TransactionStatus
    paid_at: Optional[dt.datetime]
    notes: Optional[str]
    event_id: Optional[int]
    service_task_id: Optional[int]
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)
