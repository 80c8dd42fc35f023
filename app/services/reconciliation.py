"""
Zahlungsabgleich für Buchungen.

Der Zahlungsstatus einer Buchung (Kategorie "event") ist ein abgeleitetes
Feld: Anzahlung (gekappt auf den Gesamtwert) plus alle bezahlten Einnahmen,
die mit der Buchung verknüpft sind, verglichen mit dem Gesamtwert.
"""
import logging
from decimal import Decimal
from typing import Dict, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import transaction
from app.models import Event, Transaction
from app.models.enums import PaymentStatus, TransactionType, TransactionStatus
from app.services.change_notifier import notifier, EVENT_PAYMENT_CHANGED
from app.utils.error_decorators import service_operation
from app.utils.money import ZERO, to_decimal, clamp_deposit

logger = logging.getLogger(__name__)


def determine_payment_status(total_value, deposit, paid_amount) -> PaymentStatus:
    """
    Bestimmt den Zahlungsstatus aus Gesamtwert, Anzahlung und Zahlungen.

    Eine Buchung mit Gesamtwert 0 gilt immer als bezahlt.
    """
    total_value = to_decimal(total_value)
    total_paid = clamp_deposit(deposit, total_value) + to_decimal(paid_amount)

    if total_paid >= total_value:
        return PaymentStatus.PAID
    if total_paid > ZERO:
        return PaymentStatus.PARTIAL
    return PaymentStatus.UNPAID


def paid_income_for_event(db: Session, event_id: int) -> Decimal:
    """Summe aller bezahlten Einnahmen, die mit der Buchung verknüpft sind"""
    total = db.query(func.coalesce(func.sum(Transaction.amount), 0)).filter(
        Transaction.event_id == event_id,
        Transaction.type == TransactionType.INCOME,
        Transaction.status == TransactionStatus.PAID,
    ).scalar()
    return to_decimal(total)


def _reconcile_locked(db: Session, event_id: int) -> Optional[Tuple[Optional[PaymentStatus], PaymentStatus]]:
    """
    Berechnet den Zahlungsstatus innerhalb der bereits offenen Transaktion.

    Ausstehende Änderungen der Session werden vorher geflusht, damit die
    Summe der Zahlungen sie enthält. Committet nicht.

    Returns:
        (alter Status, neuer Status), oder None wenn die Buchung nicht
        (mehr) existiert bzw. keine echte Buchung ist
    """
    db.flush()
    event = db.query(Event).filter(Event.id == event_id).with_for_update().first()
    if event is None:
        # Buchung wurde inzwischen gelöscht
        logger.debug(f"Reconciliation skipped: event {event_id} not found")
        return None
    if not event.is_booking:
        return None

    paid_amount = paid_income_for_event(db, event_id)
    old_status = event.payment_status
    new_status = determine_payment_status(event.total_value, event.deposit, paid_amount)
    logger.info(
        f"Reconciled event {event_id}: total={event.total_value} deposit={event.deposit} "
        f"paid={paid_amount} -> {new_status.value}"
    )
    event.payment_status = new_status
    db.flush()
    return old_status, new_status


def publish_payment_changes(changes: Dict[int, Tuple[Optional[PaymentStatus], PaymentStatus]]) -> None:
    """Meldet geänderte Zahlungsstatus; erst nach dem Commit aufrufen"""
    for event_id, (old_status, new_status) in changes.items():
        if old_status == new_status:
            continue
        notifier.publish(EVENT_PAYMENT_CHANGED, {
            "event_id": event_id,
            "old_status": old_status.value if old_status else None,
            "new_status": new_status.value,
        })


def recalculate_event_payment_status(db: Session, event_id: Optional[int]) -> Optional[PaymentStatus]:
    """
    Berechnet den Zahlungsstatus einer Buchung neu und speichert ihn.

    Lesen und Schreiben passieren in genau einer Transaktion; die Buchung
    wird dabei gesperrt (SELECT ... FOR UPDATE), damit parallele Zahlungen
    keine Updates verlieren.

    Returns:
        Neuer Status, oder None wenn die Buchung nicht (mehr) existiert bzw.
        keine echte Buchung ist
    """
    if event_id is None:
        return None

    with transaction(db):
        change = _reconcile_locked(db, event_id)

    if change is None:
        return None
    publish_payment_changes({event_id: change})
    return change[1]


@service_operation("Reconciling event payment status")
def reconcile(db: Session, event_id: int) -> Optional[PaymentStatus]:
    """Öffentliche Schnittstelle: liefert ServiceResult, wirft nie"""
    return recalculate_event_payment_status(db, event_id)


def reconcile_many(
    db: Session, *event_ids: Optional[int]
) -> Dict[int, Tuple[Optional[PaymentStatus], PaymentStatus]]:
    """
    Gleicht alle (verschiedenen) Buchungen ab, z.B. alte und neue Verknüpfung.

    Läuft in der Transaktion des Aufrufers, damit Schreibvorgang und
    Abgleich gemeinsam committet oder zurückgerollt werden. Die
    Benachrichtigung übernimmt der Aufrufer nach dem Commit über
    publish_payment_changes().
    """
    changes = {}
    for event_id in dict.fromkeys(e for e in event_ids if e is not None):
        change = _reconcile_locked(db, event_id)
        if change is not None:
            changes[event_id] = change
    return changes
