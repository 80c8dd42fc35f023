"""
Kalenderansicht: Buchungen, Serviceeinsätze und offene Zahlungen
als eine nach Beginn sortierte Liste.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from app.models import Event, ServiceTask, Transaction
from app.models.enums import (
    EventCategory,
    EventStatus,
    TransactionType,
    TransactionStatus,
)
from app.schemas.financial import DateRange
from app.utils.datetime_utils import start_of_day, end_of_day
from app.utils.error_decorators import service_operation

logger = logging.getLogger(__name__)

DEFAULT_DURATION = timedelta(hours=1)

# Farben je Kategorie/Status
DEFAULT_COLOR = "#4a6fa5"
COLOR_DONE = "#1e7a4e"
COLOR_CANCELLED = "#a83030"
EVENT_STATUS_COLORS = {
    EventStatus.VISIT_DONE: COLOR_DONE,
    EventStatus.VISIT_CANCELLED: COLOR_CANCELLED,
    EventStatus.VISIT_SCHEDULED: "#0d9488",
    EventStatus.PROPOSAL_SENT: COLOR_DONE,
    EventStatus.PROPOSAL_CANCELLED: COLOR_CANCELLED,
    EventStatus.PROPOSAL_PENDING: "#2a6aaa",
    EventStatus.CONFIRMING: "#9e6c14",
    EventStatus.RESERVED: COLOR_DONE,
}
SERVICE_TYPE_COLORS = {
    "Reinigung": "#3a6aac",
    "Gartenpflege": "#2a7a42",
    "Pool": "#1a7a88",
}
SERVICE_TYPE_FALLBACK_COLOR = "#5c6c90"
INCOME_COLOR = "#2a6aaa"
EXPENSE_COLOR = COLOR_CANCELLED

CATEGORY_PREFIXES = {
    EventCategory.VISIT: "Besichtigung",
    EventCategory.PROPOSAL: "Angebot senden",
}
INCOME_PREFIX = "Zahlung erhalten"
EXPENSE_PREFIX = "Zahlung leisten"


@dataclass
class CalendarEntry:
    id: int
    type: str  # "event" | "task" | "financial"
    title: str
    start: datetime
    end: datetime
    color: str
    resource: Dict[str, Any] = field(default_factory=dict)


def event_entry(event: Event) -> CalendarEntry:
    prefix = CATEGORY_PREFIXES.get(event.category) or (event.space.name if event.space else "-")
    return CalendarEntry(
        id=event.id,
        type="event",
        title=f"{prefix} - {event.title}",
        start=event.start,
        end=event.end,
        color=EVENT_STATUS_COLORS.get(event.status, DEFAULT_COLOR),
        resource={
            "category": event.category.value,
            "status": event.status.value,
            "payment_status": event.payment_status.value if event.payment_status else None,
            "space_id": event.space_id,
            "client_id": event.client_id,
        },
    )


def task_entry(task: ServiceTask) -> CalendarEntry:
    type_name = task.service_type.name if task.service_type else "-"
    space_name = task.space.name if task.space else "-"
    return CalendarEntry(
        id=task.id,
        type="task",
        title=f"[{type_name}] {space_name}",
        start=task.start,
        end=task.end or task.start + DEFAULT_DURATION,
        color=SERVICE_TYPE_COLORS.get(type_name, SERVICE_TYPE_FALLBACK_COLOR),
        resource={
            "status": task.status.value,
            "responsible": task.responsible,
            "space_id": task.space_id,
            "service_type_id": task.service_type_id,
            "event_id": task.event_id,
        },
    )


def _strip_prefix(description: str) -> str:
    for prefix in (INCOME_PREFIX, EXPENSE_PREFIX):
        if description.startswith(f"{prefix}: "):
            return description[len(prefix) + 2:]
    return description


def financial_entry(t: Transaction) -> CalendarEntry:
    is_income = t.type == TransactionType.INCOME
    prefix = INCOME_PREFIX if is_income else EXPENSE_PREFIX
    start = start_of_day(t.date)
    return CalendarEntry(
        id=t.id,
        type="financial",
        title=f"{prefix}: {_strip_prefix(t.description)}",
        start=start,
        end=start + DEFAULT_DURATION,
        color=INCOME_COLOR if is_income else EXPENSE_COLOR,
        resource={
            "transaction_type": t.type.value,
            "category": t.category.value,
            "amount": str(Decimal(t.amount)),
            "event_id": t.event_id,
            "service_task_id": t.service_task_id,
        },
    )


def merge_entries(
    events: List[Event],
    tasks: List[ServiceTask],
    pending: List[Transaction],
) -> List[CalendarEntry]:
    """Führt alle Quellen zusammen, sortiert nach Beginn (stabil je Typ)"""
    entries = (
        [event_entry(e) for e in events]
        + [task_entry(t) for t in tasks]
        + [financial_entry(t) for t in pending]
    )
    entries.sort(key=lambda entry: entry.start)
    return entries


@service_operation("Building calendar")
def calendar_entries(db: Session, start: Optional[date] = None, end: Optional[date] = None) -> List[CalendarEntry]:
    """Alle Kalendereinträge mit Beginn im (optionalen) Zeitraum"""
    period = DateRange(start=start, end=end)

    events = db.query(Event).options(joinedload(Event.space))
    tasks = db.query(ServiceTask).options(joinedload(ServiceTask.service_type), joinedload(ServiceTask.space))
    pending = db.query(Transaction).filter(Transaction.status == TransactionStatus.PENDING)

    if period.start is not None:
        events = events.filter(Event.start >= start_of_day(period.start))
        tasks = tasks.filter(ServiceTask.start >= start_of_day(period.start))
        pending = pending.filter(Transaction.date >= period.start)
    if period.end is not None:
        events = events.filter(Event.start <= end_of_day(period.end))
        tasks = tasks.filter(ServiceTask.start <= end_of_day(period.end))
        pending = pending.filter(Transaction.date <= period.end)

    entries = merge_entries(events.all(), tasks.all(), pending.all())
    logger.debug(f"Calendar {period.start}..{period.end}: {len(entries)} entries")
    return entries
