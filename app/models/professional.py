"""Professional (Dienstleister) Model"""
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Table
from sqlalchemy.orm import relationship

from app.database import Base
from app.utils.datetime_utils import get_utc_timestamp


# Zuordnung Buchung <-> Dienstleister (n:m)
event_professionals = Table(
    "event_professionals",
    Base.metadata,
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column("professional_id", Integer, ForeignKey("professionals.id", ondelete="CASCADE"), primary_key=True),
)


class Professional(Base):
    """Externer Dienstleister (z.B. DJ, Buffet, Fotograf)"""
    __tablename__ = "professionals"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    type = Column(String(100), nullable=False)  # z.B. "DJ", "Buffet"
    phone = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=get_utc_timestamp, nullable=False)
    updated_at = Column(DateTime, default=get_utc_timestamp, onupdate=get_utc_timestamp, nullable=False)

    # Beziehungen
    events = relationship("Event", secondary=event_professionals, back_populates="professionals")

    def __repr__(self):
        return f"<Professional {self.name} ({self.type})>"
