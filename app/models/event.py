"""Event (Buchung) Model"""
from decimal import Decimal

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Numeric, CheckConstraint
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.enums import (
    EventCategory,
    EventStatus,
    PaymentStatus,
    ContractStatus,
    enum_type,
)
from app.models.professional import event_professionals
from app.utils.datetime_utils import get_utc_timestamp


class Event(Base):
    """
    Repräsentiert einen Kalendereintrag für einen Raum.

    Kategorie "event" ist eine echte Buchung mit Gesamtpreis und Anzahlung;
    "visit" (Besichtigung) und "proposal" (Angebot) sind Vorstufen ohne
    eigenen Zahlungsfluss.

    payment_status ist bei Buchungen ein abgeleitetes Feld und wird
    ausschließlich vom Zahlungsabgleich (app.services.reconciliation) gesetzt.
    """
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("total_value >= 0", name="ck_events_total_value_non_negative"),
        CheckConstraint("deposit >= 0", name="ck_events_deposit_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    category = Column(enum_type(EventCategory), default=EventCategory.EVENT, nullable=False, index=True)
    start = Column(DateTime, nullable=False, index=True)
    end = Column(DateTime, nullable=False)
    status = Column(enum_type(EventStatus), default=EventStatus.CONFIRMING, nullable=False)
    payment_status = Column(enum_type(PaymentStatus), default=PaymentStatus.UNPAID, nullable=False)
    contract_status = Column(enum_type(ContractStatus), default=ContractStatus.PENDING, nullable=False)

    # Finanzielle Konditionen (Rohwerte, Anzahlung wird NICHT auf total_value gekappt)
    total_value = Column(Numeric(10, 2), default=Decimal("0.00"), nullable=False)
    deposit = Column(Numeric(10, 2), default=Decimal("0.00"), nullable=False)

    notes = Column(Text, nullable=True)

    # Foreign Keys
    space_id = Column(Integer, ForeignKey("spaces.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True, index=True)

    # Timestamps
    created_at = Column(DateTime, default=get_utc_timestamp, nullable=False)
    updated_at = Column(DateTime, default=get_utc_timestamp, onupdate=get_utc_timestamp, nullable=False)

    # Beziehungen
    space = relationship("Space", back_populates="events")
    client = relationship("Client", back_populates="events")
    professionals = relationship("Professional", secondary=event_professionals, back_populates="events")
    transactions = relationship("Transaction", back_populates="event")
    service_tasks = relationship("ServiceTask", back_populates="event")

    @property
    def is_booking(self) -> bool:
        """True für echte Buchungen (Kategorie 'event')"""
        return self.category == EventCategory.EVENT

    def __repr__(self):
        return f"<Event {self.title} ({self.category.value if self.category else '-'})>"
