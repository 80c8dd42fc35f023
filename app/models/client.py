"""Client (Kunde) Model"""
from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship

from app.database import Base
from app.utils.datetime_utils import get_utc_timestamp


class Client(Base):
    """Repräsentiert einen Mieter bzw. Ansprechpartner einer Buchung"""
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(200), nullable=True)
    document = Column(String(50), nullable=True)  # CPF/Ausweisnummer für Verträge
    address = Column(String(300), nullable=True)
    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=get_utc_timestamp, nullable=False)
    updated_at = Column(DateTime, default=get_utc_timestamp, onupdate=get_utc_timestamp, nullable=False)

    # Beziehungen
    events = relationship("Event", back_populates="client")

    def __repr__(self):
        return f"<Client {self.name}>"
