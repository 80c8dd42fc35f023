"""Transaction (manuelle Buchung) Model"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, Numeric, CheckConstraint, event
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.enums import TransactionType, TransactionStatus, TransactionCategory, enum_type
from app.utils.datetime_utils import get_utc_timestamp, utcnow


class Transaction(Base):
    """
    Repräsentiert eine manuelle Einnahme oder Ausgabe.

    Optional mit einer Buchung (z.B. Anzahlung, Raten) oder einem
    Serviceeinsatz (z.B. Reinigungskosten) verknüpft.

    Invariante: paid_at ist genau dann gesetzt, wenn status == paid.
    """
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        CheckConstraint(
            "(status = 'paid' AND paid_at IS NOT NULL) OR (status = 'pending' AND paid_at IS NULL)",
            name="ck_transactions_paid_at_matches_status",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    type = Column(enum_type(TransactionType, length=10), nullable=False, index=True)
    category = Column(enum_type(TransactionCategory), nullable=False, index=True)
    description = Column(String(300), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)  # Fälligkeits-/Erwartungsdatum
    status = Column(enum_type(TransactionStatus, length=10), default=TransactionStatus.PAID, nullable=False, index=True)
    paid_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)

    # Foreign Keys
    event_id = Column(Integer, ForeignKey("events.id", ondelete="SET NULL"), nullable=True, index=True)
    service_task_id = Column(Integer, ForeignKey("service_tasks.id", ondelete="SET NULL"), nullable=True, index=True)

    # Timestamps
    created_at = Column(DateTime, default=get_utc_timestamp, nullable=False)
    updated_at = Column(DateTime, default=get_utc_timestamp, onupdate=get_utc_timestamp, nullable=False)

    # Beziehungen
    event = relationship("Event", back_populates="transactions")
    service_task = relationship("ServiceTask", back_populates="transactions")

    @property
    def is_paid(self) -> bool:
        return self.status == TransactionStatus.PAID

    def __repr__(self):
        return f"<Transaction {self.type.value if self.type else '-'} {self.amount} ({self.status.value if self.status else '-'})>"


def apply_paid_at_rule(target: Transaction) -> None:
    """Gleicht paid_at an den Status an (gesetzt genau dann, wenn bezahlt)"""
    if target.status == TransactionStatus.PAID:
        if target.paid_at is None:
            target.paid_at = utcnow()
    else:
        target.paid_at = None


@event.listens_for(Transaction, "before_insert")
def _transaction_before_insert(mapper, connection, target):
    # Spalten-Defaults greifen erst beim INSERT, der Status wird hier schon gebraucht
    if target.status is None:
        target.status = TransactionStatus.PAID
    apply_paid_at_rule(target)


@event.listens_for(Transaction, "before_update")
def _transaction_before_update(mapper, connection, target):
    apply_paid_at_rule(target)
