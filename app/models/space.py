"""Space (Raum) Model"""
from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.orm import relationship

from app.database import Base
from app.utils.datetime_utils import get_utc_timestamp


class Space(Base):
    """
    Repräsentiert einen vermietbaren Raum (z.B. Festsaal, Landgut).

    Die Eigentümer- und Adressdaten werden für die Mietverträge verwendet.
    """
    __tablename__ = "spaces"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, unique=True, index=True)
    address = Column(String(300), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(50), nullable=True)

    # Vertragsdaten (Vermieter)
    owner_name = Column(String(200), nullable=True)
    owner_document = Column(String(50), nullable=True)  # z.B. CPF/Steuernummer
    owner_role = Column(String(100), nullable=True)
    contract_prefix = Column(String(10), nullable=True)  # Präfix der Vertragsnummer, z.B. "EST"

    active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=get_utc_timestamp, nullable=False)
    updated_at = Column(DateTime, default=get_utc_timestamp, onupdate=get_utc_timestamp, nullable=False)

    # Beziehungen
    events = relationship("Event", back_populates="space")
    service_tasks = relationship("ServiceTask", back_populates="space")

    def __repr__(self):
        return f"<Space {self.name}>"
