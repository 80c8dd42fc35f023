"""Service für Kalendereinträge (Buchungen, Besichtigungen, Angebote)"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from app.database import transaction
from app.models import Client, Event, Professional, Space
from app.models.enums import EventCategory, PaymentStatus, DEFAULT_EVENT_STATUS
from app.schemas.event import EventCreate, EventUpdate, check_status_for_category
from app.services.reconciliation import reconcile_many, publish_payment_changes
from app.utils.datetime_utils import start_of_day, end_of_day
from app.utils.error_decorators import service_operation
from app.utils.error_handler import NotFoundError

logger = logging.getLogger(__name__)

# Änderungen an diesen Feldern wirken sich auf den Zahlungsstatus aus
PAYMENT_FIELDS = ("total_value", "deposit", "category")


def _get_or_404(db: Session, event_id: int) -> Event:
    event = db.query(Event).options(
        joinedload(Event.space),
        joinedload(Event.client),
        selectinload(Event.professionals),
    ).filter(Event.id == event_id).first()
    if event is None:
        raise NotFoundError("Buchung", event_id)
    return event


def _check_references(db: Session, space_id: Optional[int], client_id: Optional[int]) -> None:
    if space_id is not None and db.get(Space, space_id) is None:
        raise NotFoundError("Raum", space_id)
    if client_id is not None and db.get(Client, client_id) is None:
        raise NotFoundError("Kunde", client_id)


def _load_professionals(db: Session, professional_ids: List[int]) -> List[Professional]:
    ids = list(dict.fromkeys(professional_ids))
    if not ids:
        return []
    professionals = db.query(Professional).filter(Professional.id.in_(ids)).all()
    missing = set(ids) - {p.id for p in professionals}
    if missing:
        raise NotFoundError("Dienstleister", min(missing))
    return professionals


@service_operation("Listing events")
def list_events(
    db: Session,
    start: Optional[date] = None,
    end: Optional[date] = None,
    category: Optional[EventCategory] = None,
    space_id: Optional[int] = None,
) -> List[Event]:
    """Kalendereinträge mit Beginn im Zeitraum, aufsteigend nach Beginn"""
    query = db.query(Event).options(
        joinedload(Event.space),
        joinedload(Event.client),
        selectinload(Event.professionals),
    )
    if start is not None:
        query = query.filter(Event.start >= start_of_day(start))
    if end is not None:
        query = query.filter(Event.start <= end_of_day(end))
    if category is not None:
        query = query.filter(Event.category == category)
    if space_id is not None:
        query = query.filter(Event.space_id == space_id)
    return query.order_by(Event.start.asc(), Event.id.asc()).all()


@service_operation("Loading event")
def get_event(db: Session, event_id: int) -> Event:
    return _get_or_404(db, event_id)


@service_operation("Creating event")
def create_event(db: Session, data: EventCreate) -> Event:
    """
    Legt einen Kalendereintrag an.

    Der Zahlungsstatus einer Buchung wird in derselben Transaktion aus
    Gesamtwert und Anzahlung abgeleitet.
    """
    _check_references(db, data.space_id, data.client_id)
    professionals = _load_professionals(db, data.professional_ids)

    with transaction(db):
        event = Event(**data.model_dump(exclude={"professional_ids"}))
        event.professionals = professionals
        db.add(event)
        db.flush()
        event_id = event.id
        payment_changes = reconcile_many(db, event_id)

    logger.info(f"Event {event_id} created ({data.category.value}, space {data.space_id})")
    publish_payment_changes(payment_changes)
    return _get_or_404(db, event_id)


@service_operation("Updating event")
def update_event(db: Session, event_id: int, data: EventUpdate) -> Event:
    """
    Aktualisiert einen Kalendereintrag.

    Ändern sich Gesamtwert, Anzahlung oder Kategorie, wird der
    Zahlungsstatus neu berechnet. Die Dienstleister-Zuordnung wird bei
    Angabe von professional_ids vollständig ersetzt.
    """
    event = _get_or_404(db, event_id)
    changes = data.model_dump(exclude_unset=True)
    professional_ids = changes.pop("professional_ids", None)

    for key in ("title", "category", "start", "end", "status", "contract_status",
                "total_value", "deposit", "space_id"):
        if key in changes and changes[key] is None:
            raise ValueError(f"{key} darf nicht leer sein")

    category = changes.get("category", event.category)
    status = changes.get("status")
    if status is None and "category" in changes and category != event.category:
        # Status der alten Kategorie passt nicht mehr
        status = DEFAULT_EVENT_STATUS[category]
        changes["status"] = status
    check_status_for_category(category, status or event.status)

    start = changes.get("start", event.start)
    end = changes.get("end", event.end)
    if end < start:
        raise ValueError("Ende darf nicht vor dem Beginn liegen")

    _check_references(db, changes.get("space_id"), changes.get("client_id"))
    professionals = None if professional_ids is None else _load_professionals(db, professional_ids)

    with transaction(db):
        for key, value in changes.items():
            setattr(event, key, value)
        if professionals is not None:
            event.professionals = professionals
        if not event.is_booking:
            # Zahlungsstatus gilt nur für Buchungen
            event.payment_status = PaymentStatus.UNPAID
        payment_changes = {}
        if any(key in changes for key in PAYMENT_FIELDS):
            payment_changes = reconcile_many(db, event_id)

    logger.info(f"Event {event_id} updated: {sorted(data.model_fields_set)}")
    publish_payment_changes(payment_changes)
    return _get_or_404(db, event_id)


@service_operation("Deleting event")
def delete_event(db: Session, event_id: int) -> int:
    """
    Löscht einen Kalendereintrag.

    Verknüpfte Transaktionen und Serviceeinsätze bleiben erhalten und
    verlieren nur die Verknüpfung.
    """
    event = _get_or_404(db, event_id)
    with transaction(db):
        db.delete(event)
    logger.info(f"Event {event_id} deleted")
    return event_id
