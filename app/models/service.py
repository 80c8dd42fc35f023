"""ServiceType und ServiceTask (Serviceeinsätze) Models"""
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.enums import ServiceTaskStatus, enum_type
from app.utils.datetime_utils import get_utc_timestamp


class ServiceType(Base):
    """Art eines Serviceeinsatzes (z.B. Reinigung, Gartenpflege, Pool)"""
    __tablename__ = "service_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)

    # Beziehungen
    tasks = relationship("ServiceTask", back_populates="service_type")

    def __repr__(self):
        return f"<ServiceType {self.name}>"


class ServiceTask(Base):
    """
    Repräsentiert einen geplanten Serviceeinsatz in einem Raum,
    optional im Zusammenhang mit einer Buchung.
    """
    __tablename__ = "service_tasks"

    id = Column(Integer, primary_key=True, index=True)
    start = Column(DateTime, nullable=False, index=True)
    end = Column(DateTime, nullable=True)
    responsible = Column(String(200), nullable=True)
    status = Column(enum_type(ServiceTaskStatus), default=ServiceTaskStatus.PENDING, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    # Foreign Keys
    space_id = Column(Integer, ForeignKey("spaces.id"), nullable=False, index=True)
    service_type_id = Column(Integer, ForeignKey("service_types.id"), nullable=False)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="SET NULL"), nullable=True, index=True)

    # Timestamps
    created_at = Column(DateTime, default=get_utc_timestamp, nullable=False)
    updated_at = Column(DateTime, default=get_utc_timestamp, onupdate=get_utc_timestamp, nullable=False)

    # Beziehungen
    space = relationship("Space", back_populates="service_tasks")
    service_type = relationship("ServiceType", back_populates="tasks")
    event = relationship("Event", back_populates="service_tasks")
    transactions = relationship("Transaction", back_populates="service_task")

    def __repr__(self):
        return f"<ServiceTask {self.service_type_id} @ {self.start}>"
