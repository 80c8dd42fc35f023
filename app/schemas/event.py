"""Pydantic Schemas für Event (Buchung)"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.enums import (
    EventCategory,
    EventStatus,
    PaymentStatus,
    ContractStatus,
    EVENT_STATUSES_BY_CATEGORY,
    DEFAULT_EVENT_STATUS,
)
from app.utils.datetime_utils import to_local_naive
from app.utils.validators import Validators


def check_status_for_category(category: EventCategory, status: EventStatus) -> None:
    """
    Prüft, ob der Status zur Kategorie passt.

    Raises:
        ValueError: z.B. 'visit_done' für eine Buchung
    """
    if status not in EVENT_STATUSES_BY_CATEGORY[category]:
        raise ValueError(f"Status '{status.value}' ist für Kategorie '{category.value}' nicht erlaubt")


class EventCreate(BaseModel):
    """
    Schema für das Erstellen eines Kalendereintrags.

    Der Zahlungsstatus ist kein Eingabefeld: er wird bei Buchungen aus
    Gesamtwert, Anzahlung und bezahlten Einnahmen abgeleitet.
    """
    title: str = Field(..., min_length=1, max_length=200)
    category: EventCategory = EventCategory.EVENT
    start: datetime
    end: datetime
    status: Optional[EventStatus] = None
    contract_status: ContractStatus = ContractStatus.PENDING
    total_value: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    deposit: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    notes: Optional[str] = None
    space_id: int = Field(..., gt=0)
    client_id: Optional[int] = Field(None, gt=0)
    professional_ids: List[int] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validiert den Titel"""
        return Validators.validate_required_text(v, "Titel")

    @field_validator('client_id', mode='before')
    @classmethod
    def empty_str_to_none(cls, v):
        """Konvertiert leere Strings zu None"""
        if isinstance(v, str) and v.strip() == '':
            return None
        return v

    @field_validator('start', 'end')
    @classmethod
    def normalize_datetime(cls, v: datetime) -> datetime:
        """Zeitzonen entfernen (lokale Zeit), damit Beginn und Ende vergleichbar sind"""
        return to_local_naive(v)

    @model_validator(mode='after')
    def validate_event(self) -> "EventCreate":
        """Zeitraum und Status prüfen, Standard-Status je Kategorie setzen"""
        if self.end < self.start:
            raise ValueError("Ende darf nicht vor dem Beginn liegen")

        if self.status is None:
            self.status = DEFAULT_EVENT_STATUS[self.category]
        check_status_for_category(self.category, self.status)
        return self


class EventUpdate(BaseModel):
    """
    Schema für das Aktualisieren eines Kalendereintrags.

    Kategorie/Status und Beginn/Ende werden nach dem Zusammenführen mit dem
    gespeicherten Datensatz im Service geprüft.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[EventCategory] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    status: Optional[EventStatus] = None
    contract_status: Optional[ContractStatus] = None
    total_value: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    deposit: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    notes: Optional[str] = None
    space_id: Optional[int] = Field(None, gt=0)
    client_id: Optional[int] = Field(None, gt=0)
    professional_ids: Optional[List[int]] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return Validators.validate_required_text(v, "Titel")

    @field_validator('start', 'end')
    @classmethod
    def normalize_datetime(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(v)


class EventResponse(BaseModel):
    """Schema für die Antwort"""
    id: int
    title: str
    category: EventCategory
    start: datetime
    end: datetime
    status: EventStatus
    payment_status: PaymentStatus
    contract_status: ContractStatus
    total_value: Decimal
    deposit: Decimal
    notes: Optional[str]
    space_id: int
    space_name: Optional[str] = None
    client_id: Optional[int]
    client_name: Optional[str] = None
    professional_ids: List[int] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_event(cls, event) -> "EventResponse":
        """Baut die Antwort inkl. Raum-/Kundenname und Dienstleister-IDs"""
        response = cls.model_validate(event)
        response.space_name = event.space.name if event.space else None
        response.client_name = event.client.name if event.client else None
        response.professional_ids = [p.id for p in event.professionals]
        return response
