"""SQLAlchemy Models für die Eventraum-Verwaltung"""
from app.models.space import Space
from app.models.client import Client
from app.models.professional import Professional, event_professionals
from app.models.event import Event
from app.models.service import ServiceType, ServiceTask
from app.models.transaction import Transaction

__all__ = [
    "Space",
    "Client",
    "Professional",
    "event_professionals",
    "Event",
    "ServiceType",
    "ServiceTask",
    "Transaction",
]
