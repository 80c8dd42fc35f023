"""
Finanzübersicht: Einnahmen aus Buchungen, manuelle Einnahmen/Ausgaben,
Aufschlüsselungen nach Kategorie, Monat und Raum sowie Prognose.

Die eigentliche Berechnung (build_financial_summary) ist eine reine
Funktion über bereits geladene Datensätze; die Service-Funktionen laden
nur die Daten und delegieren.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.config import settings
from app.models import Event, Transaction
from app.models.enums import (
    EventCategory,
    PaymentStatus,
    TransactionCategory,
    TransactionType,
    TransactionStatus,
    SERVICE_PENDING_CATEGORIES,
)
from app.schemas.financial import DateRange
from app.services.reconciliation import determine_payment_status
from app.utils.datetime_utils import start_of_day, end_of_day, month_key, forecast_window
from app.utils.datetime_utils import resolve_period as resolve_named_period
from app.utils.error_decorators import service_operation
from app.utils.money import ZERO, to_decimal, clamp_deposit, ratio

logger = logging.getLogger(__name__)


@dataclass
class EventIncomeTotals:
    total: Decimal = ZERO
    deposits_received: Decimal = ZERO
    pending_payments: Decimal = ZERO
    paid_events: int = 0
    partial_events: int = 0
    unpaid_events: int = 0
    event_count: int = 0
    collection_rate: float = 0.0  # nur Anzeige


@dataclass
class CategoryTotals:
    income: Decimal = ZERO
    expense: Decimal = ZERO


@dataclass
class MonthTotals:
    income: Decimal = ZERO
    expense: Decimal = ZERO
    events: int = 0


@dataclass
class SpaceTotals:
    income: Decimal = ZERO
    events: int = 0


@dataclass
class ForecastTotals:
    total_forecast_income: Decimal = ZERO
    total_forecast_expense: Decimal = ZERO
    service_pending_expense: Decimal = ZERO


@dataclass
class FinancialSummary:
    event_income: EventIncomeTotals = field(default_factory=EventIncomeTotals)
    manual_income: Decimal = ZERO
    manual_expense: Decimal = ZERO
    total_income: Decimal = ZERO
    total_expense: Decimal = ZERO
    balance: Decimal = ZERO
    service_pending_total: Decimal = ZERO
    by_category: Dict[str, CategoryTotals] = field(default_factory=dict)
    by_month: Dict[str, MonthTotals] = field(default_factory=dict)
    by_space: Dict[str, SpaceTotals] = field(default_factory=dict)
    forecast: ForecastTotals = field(default_factory=ForecastTotals)


@dataclass
class ForecastSummary:
    start: date
    end: date
    totals: ForecastTotals = field(default_factory=ForecastTotals)
    by_category: Dict[str, Decimal] = field(default_factory=dict)
    pending_count: int = 0


@dataclass
class TransactionsSummary:
    total_income: Decimal = ZERO
    total_expense: Decimal = ZERO
    balance: Decimal = ZERO
    by_category: Dict[str, CategoryTotals] = field(default_factory=dict)
    by_month: Dict[str, CategoryTotals] = field(default_factory=dict)


@dataclass
class FinancialEntry:
    """Eintrag der kombinierten Liste (Buchung oder manuelle Transaktion)"""
    id: str
    source: str  # "event" | "manual"
    source_id: int
    type: TransactionType
    category: str
    description: str
    amount: Decimal
    deposit_amount: Decimal
    date: date
    payment_status: Optional[PaymentStatus] = None
    status: Optional[TransactionStatus] = None
    event_id: Optional[int] = None
    space_name: Optional[str] = None
    notes: Optional[str] = None


def _space_name(event) -> str:
    return event.space.name if event.space else "-"


def build_financial_summary(
    events: Iterable[Event],
    transactions: Iterable[Transaction],
    payments_by_event: Mapping[int, Decimal],
) -> FinancialSummary:
    """
    Faltet Buchungen und Transaktionen zu einer Finanzübersicht.

    Args:
        events: Buchungen (Kategorie "event") im Zeitraum
        transactions: Transaktionen mit Datum im Zeitraum
        payments_by_event: Summe bezahlter Einnahmen je Buchungs-ID

    Bezahlte Einnahmen, die mit einer Buchung verknüpft sind, stecken bereits
    in deren erhaltenem Betrag und werden nicht noch einmal als manuelle
    Einnahme gezählt.
    """
    summary = FinancialSummary()
    event_income = summary.event_income
    by_category: Dict[str, CategoryTotals] = defaultdict(CategoryTotals)
    by_month: Dict[str, MonthTotals] = defaultdict(MonthTotals)
    by_space: Dict[str, SpaceTotals] = defaultdict(SpaceTotals)

    for event in events:
        total_value = to_decimal(event.total_value)
        deposit = clamp_deposit(event.deposit, total_value)
        additional = to_decimal(payments_by_event.get(event.id, ZERO))
        total_paid = min(deposit + additional, total_value)
        pending = max(total_value - total_paid, ZERO)

        status = determine_payment_status(total_value, deposit, additional)
        if status == PaymentStatus.PAID:
            event_income.paid_events += 1
        elif status == PaymentStatus.PARTIAL:
            event_income.partial_events += 1
        else:
            event_income.unpaid_events += 1

        event_income.event_count += 1
        event_income.total += total_value
        event_income.deposits_received += total_paid
        event_income.pending_payments += pending

        month = by_month[month_key(event.start)]
        month.events += 1
        month.income += total_paid

        space = by_space[_space_name(event)]
        space.events += 1
        space.income += total_paid

        by_category[TransactionCategory.EVENT_PAYMENT.value].income += total_paid

    for t in transactions:
        amount = to_decimal(t.amount)
        is_income = t.type == TransactionType.INCOME

        if not is_income and t.status != TransactionStatus.PAID and t.category in SERVICE_PENDING_CATEGORIES:
            summary.service_pending_total += amount

        if t.status == TransactionStatus.PENDING:
            if is_income:
                summary.forecast.total_forecast_income += amount
            else:
                summary.forecast.total_forecast_expense += amount
                if t.category in SERVICE_PENDING_CATEGORIES:
                    summary.forecast.service_pending_expense += amount

        # Nur bezahlte Transaktionen zählen zu den realisierten Summen
        if t.status != TransactionStatus.PAID:
            continue
        # Bereits über die Buchung gezählt
        if t.event_id is not None and is_income:
            continue

        category = by_category[t.category.value]
        month = by_month[month_key(t.date)]
        if is_income:
            summary.manual_income += amount
            category.income += amount
            month.income += amount
        else:
            summary.manual_expense += amount
            category.expense += amount
            month.expense += amount

    summary.total_income = event_income.deposits_received + summary.manual_income
    summary.total_expense = summary.manual_expense
    summary.balance = summary.total_income - summary.total_expense
    event_income.collection_rate = ratio(event_income.deposits_received, event_income.total)

    summary.by_category = dict(by_category)
    summary.by_month = dict(sorted(by_month.items()))
    summary.by_space = dict(sorted(by_space.items()))
    return summary


def _event_query(db: Session, start: Optional[date], end: Optional[date]):
    query = db.query(Event).options(joinedload(Event.space)).filter(Event.category == EventCategory.EVENT)
    if start is not None:
        query = query.filter(Event.start >= start_of_day(start))
    if end is not None:
        query = query.filter(Event.start <= end_of_day(end))
    return query


def _transaction_query(db: Session, start: Optional[date], end: Optional[date]):
    query = db.query(Transaction)
    if start is not None:
        query = query.filter(Transaction.date >= start)
    if end is not None:
        query = query.filter(Transaction.date <= end)
    return query


def load_payments_by_event(db: Session, event_ids: List[int]) -> Dict[int, Decimal]:
    """Bezahlte Einnahmen je Buchung in einer Abfrage (unabhängig vom Zeitraum)"""
    if not event_ids:
        return {}
    rows = db.query(Transaction.event_id, func.sum(Transaction.amount)).filter(
        Transaction.event_id.in_(event_ids),
        Transaction.type == TransactionType.INCOME,
        Transaction.status == TransactionStatus.PAID,
    ).group_by(Transaction.event_id).all()
    return {event_id: to_decimal(total) for event_id, total in rows}


@service_operation("Building financial summary")
def summarize(db: Session, start: Optional[date] = None, end: Optional[date] = None) -> FinancialSummary:
    """
    Finanzübersicht für einen optionalen Zeitraum.

    Raises (als ServiceResult):
        validation: Wenn end vor start liegt (vor jeder Abfrage)
    """
    period = DateRange(start=start, end=end)

    events = _event_query(db, period.start, period.end).all()
    transactions = _transaction_query(db, period.start, period.end).all()
    payments = load_payments_by_event(db, [e.id for e in events])

    summary = build_financial_summary(events, transactions, payments)
    logger.debug(
        f"Financial summary {period.start}..{period.end}: {len(events)} events, "
        f"{len(transactions)} transactions, balance={summary.balance}"
    )
    return summary


@service_operation("Building forecast")
def forecast_summary(db: Session, start: Optional[date] = None, end: Optional[date] = None) -> ForecastSummary:
    """
    Offene (pending) Transaktionen in einem Zukunftsfenster.

    Ohne Angaben: heute bis heute + settings.forecast_days.
    """
    default_start, default_end = forecast_window(settings.forecast_days)
    period = DateRange(start=start or default_start, end=end or default_end)

    pending = _transaction_query(db, period.start, period.end).filter(
        Transaction.status == TransactionStatus.PENDING
    ).all()

    result = ForecastSummary(start=period.start, end=period.end, pending_count=len(pending))
    by_category: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for t in pending:
        amount = to_decimal(t.amount)
        by_category[t.category.value] += amount
        if t.type == TransactionType.INCOME:
            result.totals.total_forecast_income += amount
        else:
            result.totals.total_forecast_expense += amount
            if t.category in SERVICE_PENDING_CATEGORIES:
                result.totals.service_pending_expense += amount
    result.by_category = dict(by_category)
    return result


@service_operation("Building transactions summary")
def transactions_summary(db: Session, start: Optional[date] = None, end: Optional[date] = None) -> TransactionsSummary:
    """Nur manuelle, bezahlte Transaktionen nach Kategorie und Monat"""
    period = DateRange(start=start, end=end)
    transactions = _transaction_query(db, period.start, period.end).filter(
        Transaction.status == TransactionStatus.PAID
    ).all()

    summary = TransactionsSummary()
    by_category: Dict[str, CategoryTotals] = defaultdict(CategoryTotals)
    by_month: Dict[str, CategoryTotals] = defaultdict(CategoryTotals)
    for t in transactions:
        amount = to_decimal(t.amount)
        if t.type == TransactionType.INCOME:
            summary.total_income += amount
            by_category[t.category.value].income += amount
            by_month[month_key(t.date)].income += amount
        else:
            summary.total_expense += amount
            by_category[t.category.value].expense += amount
            by_month[month_key(t.date)].expense += amount

    summary.balance = summary.total_income - summary.total_expense
    summary.by_category = dict(by_category)
    summary.by_month = dict(sorted(by_month.items()))
    return summary


def _event_entry(event: Event) -> FinancialEntry:
    description = event.title
    if event.client:
        description = f"{event.title} - {event.client.name}"
    return FinancialEntry(
        id=f"event-{event.id}",
        source="event",
        source_id=event.id,
        type=TransactionType.INCOME,
        category=TransactionCategory.EVENT_PAYMENT.value,
        description=description,
        amount=to_decimal(event.total_value),
        deposit_amount=to_decimal(event.deposit),
        date=event.start.date(),
        payment_status=event.payment_status,
        event_id=event.id,
        space_name=_space_name(event),
        notes=event.notes,
    )


def _transaction_entry(t: Transaction) -> FinancialEntry:
    space = None
    if t.event and t.event.space:
        space = t.event.space.name
    elif t.service_task and t.service_task.space:
        space = t.service_task.space.name
    return FinancialEntry(
        id=f"transaction-{t.id}",
        source="manual",
        source_id=t.id,
        type=t.type,
        category=t.category.value,
        description=t.description,
        amount=to_decimal(t.amount),
        deposit_amount=ZERO,
        date=t.date,
        status=t.status,
        event_id=t.event_id,
        space_name=space,
        notes=t.notes,
    )


@service_operation("Loading financial entries")
def all_financial_data(db: Session, start: Optional[date] = None, end: Optional[date] = None) -> List[FinancialEntry]:
    """
    Buchungen und manuelle Transaktionen als eine Liste, markiert mit
    source "event" bzw. "manual", neueste zuerst.
    """
    period = DateRange(start=start, end=end)
    events = _event_query(db, period.start, period.end).options(joinedload(Event.client)).all()
    transactions = _transaction_query(db, period.start, period.end).all()

    entries = [_event_entry(e) for e in events] + [_transaction_entry(t) for t in transactions]
    entries.sort(key=lambda entry: (entry.date, entry.source_id), reverse=True)
    return entries


@service_operation("Resolving period")
def resolve_period(period: str, reference: Optional[date] = None) -> Tuple[Optional[date], Optional[date]]:
    """Benannter Zeitraum (month, last3months, year, all) als ServiceResult"""
    return resolve_named_period(period, reference)
