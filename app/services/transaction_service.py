"""Service für manuelle Einnahmen und Ausgaben"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from app.database import transaction
from app.models import Event, ServiceTask, Transaction
from app.models.enums import TransactionType, TransactionStatus
from app.schemas.transaction import (
    TransactionCreate,
    TransactionUpdate,
    TransactionStatusUpdate,
    check_category_for_type,
)
from app.services.reconciliation import reconcile_many, publish_payment_changes
from app.utils.datetime_utils import utcnow
from app.utils.error_decorators import service_operation
from app.utils.error_handler import NotFoundError

logger = logging.getLogger(__name__)


def _get_or_404(db: Session, transaction_id: int) -> Transaction:
    t = db.query(Transaction).filter(Transaction.id == transaction_id).first()
    if t is None:
        raise NotFoundError("Transaktion", transaction_id)
    return t


def _check_links(db: Session, event_id: Optional[int], service_task_id: Optional[int]) -> None:
    """Verknüpfte Buchung / Serviceeinsatz müssen existieren"""
    if event_id is not None and db.get(Event, event_id) is None:
        raise NotFoundError("Buchung", event_id)
    if service_task_id is not None and db.get(ServiceTask, service_task_id) is None:
        raise NotFoundError("Serviceeinsatz", service_task_id)


def _income_event_id(t_type: TransactionType, event_id: Optional[int]) -> Optional[int]:
    """Buchung, deren Zahlungsstatus von dieser Transaktion abhängt"""
    return event_id if t_type == TransactionType.INCOME else None


def _apply_status(t: Transaction, status: TransactionStatus, paid_at=None) -> None:
    """Setzt Status und paid_at konsistent (paid_at genau dann, wenn bezahlt)"""
    t.status = status
    if status == TransactionStatus.PAID:
        t.paid_at = paid_at or t.paid_at or utcnow()
    else:
        t.paid_at = None


@service_operation("Listing transactions")
def list_transactions(db: Session, start: Optional[date] = None, end: Optional[date] = None) -> List[Transaction]:
    query = db.query(Transaction)
    if start is not None:
        query = query.filter(Transaction.date >= start)
    if end is not None:
        query = query.filter(Transaction.date <= end)
    return query.order_by(Transaction.date.desc(), Transaction.id.desc()).all()


@service_operation("Loading transaction")
def get_transaction(db: Session, transaction_id: int) -> Transaction:
    return _get_or_404(db, transaction_id)


@service_operation("Creating transaction")
def create_transaction(db: Session, data: TransactionCreate) -> Transaction:
    """
    Legt eine Transaktion an.

    Ist sie eine Einnahme mit verknüpfter Buchung, wird deren
    Zahlungsstatus in derselben Transaktion neu berechnet. Schlägt der
    Abgleich fehl, wird auch die Transaktion nicht gespeichert.
    """
    _check_links(db, data.event_id, data.service_task_id)

    with transaction(db):
        t = Transaction(**data.model_dump(exclude={"status", "paid_at"}))
        _apply_status(t, data.status, data.paid_at)
        db.add(t)
        db.flush()
        transaction_id = t.id
        changes = reconcile_many(db, _income_event_id(t.type, t.event_id))

    logger.info(f"Transaction {transaction_id} created: {t.type.value} {t.amount} ({t.status.value})")
    publish_payment_changes(changes)
    return t


@service_operation("Updating transaction")
def update_transaction(db: Session, transaction_id: int, data: TransactionUpdate) -> Transaction:
    """
    Aktualisiert eine Transaktion.

    Alte und neue verknüpfte Buchung werden abgeglichen, da sich
    event_id oder Typ geändert haben können.
    """
    t = _get_or_404(db, transaction_id)
    old_event_id = _income_event_id(t.type, t.event_id)

    updates = data.model_dump(exclude_unset=True)
    status = updates.pop("status", None)
    paid_at = updates.pop("paid_at", None)
    for key in ("type", "category", "description", "amount", "date"):
        if key in updates and updates[key] is None:
            raise ValueError(f"{key} darf nicht leer sein")

    new_type = updates.get("type", t.type)
    new_category = updates.get("category", t.category)
    check_category_for_type(new_type, new_category)
    _check_links(db, updates.get("event_id"), updates.get("service_task_id"))

    with transaction(db):
        for key, value in updates.items():
            setattr(t, key, value)
        if status is not None:
            _apply_status(t, status, paid_at)
        elif paid_at is not None and t.is_paid:
            t.paid_at = paid_at
        changes = reconcile_many(db, old_event_id, _income_event_id(t.type, t.event_id))

    logger.info(f"Transaction {transaction_id} updated: {sorted(data.model_fields_set)}")
    publish_payment_changes(changes)
    return t


@service_operation("Updating transaction status")
def update_status(db: Session, transaction_id: int, data: TransactionStatusUpdate) -> Transaction:
    """Markiert eine Transaktion als bezahlt oder offen"""
    t = _get_or_404(db, transaction_id)

    with transaction(db):
        _apply_status(t, data.status, data.paid_at)
        changes = reconcile_many(db, _income_event_id(t.type, t.event_id))

    logger.info(f"Transaction {transaction_id} marked as {data.status.value}")
    publish_payment_changes(changes)
    return t


@service_operation("Deleting transaction")
def delete_transaction(db: Session, transaction_id: int) -> int:
    t = _get_or_404(db, transaction_id)
    event_id = _income_event_id(t.type, t.event_id)

    with transaction(db):
        db.delete(t)
        changes = reconcile_many(db, event_id)

    logger.info(f"Transaction {transaction_id} deleted")
    publish_payment_changes(changes)
    return transaction_id
