"""Ledger: filterbare, sortierte Liste der manuellen Transaktionen mit Summen"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional, Union

from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Session, joinedload

from app.models import Event, ServiceTask, Transaction
from app.models.enums import (
    TransactionType,
    TransactionStatus,
    TransactionCategory,
    SERVICE_PENDING_CATEGORIES,
)
from app.schemas.financial import LedgerFilters
from app.utils.error_decorators import service_operation
from app.utils.money import ZERO, to_decimal
from app.utils.validators import Validators

logger = logging.getLogger(__name__)


@dataclass
class LedgerEntry:
    id: int
    type: TransactionType
    category: TransactionCategory
    description: str
    amount: Decimal
    date: date
    status: TransactionStatus
    paid_at: Optional[datetime]
    notes: Optional[str]
    event_id: Optional[int]
    service_task_id: Optional[int]
    reference: str
    space_name: Optional[str]
    created_at: datetime


@dataclass
class LedgerSummary:
    paid_income: Decimal = ZERO
    paid_expense: Decimal = ZERO
    pending_income: Decimal = ZERO
    pending_expense: Decimal = ZERO
    service_pending_total: Decimal = ZERO


@dataclass
class LedgerResult:
    entries: List[LedgerEntry] = field(default_factory=list)
    summary: LedgerSummary = field(default_factory=LedgerSummary)


def _reference(t: Transaction) -> str:
    """Titel der Buchung, sonst Serviceart des Einsatzes, sonst '-'"""
    if t.event is not None:
        return t.event.title
    if t.service_task is not None and t.service_task.service_type is not None:
        return t.service_task.service_type.name
    return "-"


def _space_name(t: Transaction) -> Optional[str]:
    if t.event is not None and t.event.space is not None:
        return t.event.space.name
    if t.service_task is not None and t.service_task.space is not None:
        return t.service_task.space.name
    return None


def to_entry(t: Transaction) -> LedgerEntry:
    return LedgerEntry(
        id=t.id,
        type=t.type,
        category=t.category,
        description=t.description,
        amount=to_decimal(t.amount),
        date=t.date,
        status=t.status,
        paid_at=t.paid_at,
        notes=t.notes,
        event_id=t.event_id,
        service_task_id=t.service_task_id,
        reference=_reference(t),
        space_name=_space_name(t),
        created_at=t.created_at,
    )


def summarize_entries(entries: Iterable[LedgerEntry]) -> LedgerSummary:
    """Summen über die gefilterten Einträge, getrennt nach Status"""
    summary = LedgerSummary()
    for entry in entries:
        if entry.type == TransactionType.INCOME:
            if entry.status == TransactionStatus.PAID:
                summary.paid_income += entry.amount
            else:
                summary.pending_income += entry.amount
        else:
            if entry.status == TransactionStatus.PAID:
                summary.paid_expense += entry.amount
            else:
                summary.pending_expense += entry.amount
                if entry.category in SERVICE_PENDING_CATEGORIES:
                    summary.service_pending_total += entry.amount
    return summary


def build_ledger_query(db: Session, filters: LedgerFilters):
    """Abfrage mit allen (UND-verknüpften) Filtern und fester Sortierung"""
    query = db.query(Transaction).options(
        joinedload(Transaction.event).joinedload(Event.space),
        joinedload(Transaction.service_task).joinedload(ServiceTask.service_type),
        joinedload(Transaction.service_task).joinedload(ServiceTask.space),
    )

    if filters.start is not None:
        query = query.filter(Transaction.date >= filters.start)
    if filters.end is not None:
        query = query.filter(Transaction.date <= filters.end)
    if filters.type is not None:
        query = query.filter(Transaction.type == filters.type)
    if filters.category is not None:
        query = query.filter(Transaction.category == filters.category)
    if filters.status is not None:
        query = query.filter(Transaction.status == filters.status)
    if filters.search:
        pattern = Validators.like_pattern(filters.search)
        query = query.filter(or_(
            Transaction.description.ilike(pattern, escape="\\"),
            Transaction.notes.ilike(pattern, escape="\\"),
            cast(Transaction.category, String).ilike(pattern, escape="\\"),
        ))

    return query.order_by(
        Transaction.date.desc(),
        Transaction.created_at.desc(),
        Transaction.id.desc(),
    )


@service_operation("Listing ledger")
def list_ledger(
    db: Session,
    filters: Union[LedgerFilters, Mapping[str, Any], None] = None,
) -> LedgerResult:
    """
    Ledger-Ansicht der manuellen Transaktionen.

    Args:
        filters: LedgerFilters oder rohe Filterwerte (z.B. Query-Parameter);
            ungültige Werte werden vor der Abfrage abgelehnt

    Returns:
        LedgerResult mit Einträgen (Datum absteigend, bei gleichem Datum
        zuletzt erstellte zuerst) und Summen
    """
    if filters is None:
        filters = LedgerFilters()
    elif not isinstance(filters, LedgerFilters):
        filters = LedgerFilters.model_validate(dict(filters))

    transactions = build_ledger_query(db, filters).all()
    entries = [to_entry(t) for t in transactions]
    logger.debug(f"Ledger query returned {len(entries)} entries")
    return LedgerResult(entries=entries, summary=summarize_entries(entries))
