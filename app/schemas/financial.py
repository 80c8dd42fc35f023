"""Pydantic Schemas für Finanz-Filter und -Abfragen"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.enums import TransactionType, TransactionStatus, TransactionCategory
from app.utils.validators import Validators


def _all_to_none(v):
    """'all' bzw. leere Werte aus Formularen bedeuten: keine Einschränkung"""
    if v is None:
        return None
    if isinstance(v, str) and v.strip().lower() in ("", "all"):
        return None
    return v


class DateRange(BaseModel):
    """Optionaler Zeitraum; jede Grenze kann einzeln fehlen"""
    start: Optional[date] = None
    end: Optional[date] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator('start', 'end', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return _all_to_none(v)

    @model_validator(mode='after')
    def validate_range(self):
        Validators.validate_range(self.start, self.end)
        return self


class LedgerFilters(DateRange):
    """
    Filter für die Ledger-Ansicht.

    Alle Filter werden UND-verknüpft. None (oder "all") bedeutet keine
    Einschränkung; unbekannte Typ-/Kategorie-/Statuswerte werden abgelehnt.
    """
    type: Optional[TransactionType] = None
    category: Optional[TransactionCategory] = None
    status: Optional[TransactionStatus] = None
    search: Optional[str] = Field(None, max_length=200)

    @field_validator('type', 'category', 'status', mode='before')
    @classmethod
    def all_to_none(cls, v):
        return _all_to_none(v)

    @field_validator('search')
    @classmethod
    def clean_search(cls, v: Optional[str]) -> Optional[str]:
        return Validators.optional_text(v)
