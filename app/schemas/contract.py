"""Pydantic Schemas für Mietverträge"""
from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class ContractClause(BaseModel):
    """Eine (ggf. bearbeitete) Vertragsklausel"""
    id: str = Field(..., min_length=1, max_length=50)
    number: str = Field(..., max_length=50)
    title: str = Field(..., max_length=200)
    content: str
    edited: bool = False


class ContractForm(BaseModel):
    """
    Formulardaten für einen Mietvertrag.

    Alle Felder sind optional: fehlende Werte werden im Vertragstext
    durch Platzhalter wie '[CPF]' ersetzt.
    """
    contract_number: Optional[str] = None
    contract_date: Optional[date] = None
    # Mieter
    client_name: Optional[str] = None
    client_document: Optional[str] = None
    client_rg: Optional[str] = None
    client_address: Optional[str] = None
    client_city: Optional[str] = None
    client_state: Optional[str] = None
    client_phone: Optional[str] = None
    client_email: Optional[str] = None
    # Veranstaltung
    event_date: Optional[date] = None
    event_start_time: Optional[str] = None
    event_end_time: Optional[str] = None
    event_type: Optional[str] = None
    guest_count: Optional[int] = Field(None, ge=0)
    # Finanzen
    total_value: Optional[Decimal] = Field(None, ge=0)
    deposit_value: Optional[Decimal] = Field(None, ge=0)
    deposit_due_date: Optional[date] = None
    remaining_value: Optional[Decimal] = Field(None, ge=0)
    remaining_due_date: Optional[date] = None
    payment_method: Optional[str] = None
    observations: Optional[str] = None

    @field_validator(
        'contract_date', 'event_date', 'deposit_due_date', 'remaining_due_date',
        'guest_count', 'total_value', 'deposit_value', 'remaining_value',
        mode='before',
    )
    @classmethod
    def empty_str_to_none(cls, v):
        """Konvertiert leere Strings zu None"""
        if isinstance(v, str) and v.strip() == '':
            return None
        return v


class ContractRequest(BaseModel):
    """Anfrage für die PDF-Erzeugung: Formulardaten plus optional bearbeitete Klauseln"""
    form: ContractForm = Field(default_factory=ContractForm)
    clauses: Optional[List[ContractClause]] = None
