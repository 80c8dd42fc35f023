"""Helper für das Anlegen von Standard-Daten beim ersten Start"""
import logging

from sqlalchemy.orm import Session

from app.models import ServiceType, Space

logger = logging.getLogger(__name__)

DEFAULT_SPACES = [
    {"name": "Festsaal", "contract_prefix": "FES", "active": True},
    {"name": "Landgut", "contract_prefix": "LAN", "active": True},
]

DEFAULT_SERVICE_TYPES = [
    {"name": "Reinigung", "description": "Allgemeine Reinigung des Raums"},
    {"name": "Gartenpflege", "description": "Pflege der Außenanlagen"},
    {"name": "Pool", "description": "Reinigung und Wasserpflege des Pools"},
    {"name": "Instandhaltung", "description": "Reparaturen und Wartung"},
]


def seed_defaults(db: Session) -> dict:
    """
    Legt Standard-Räume und Servicearten an, sofern noch keine existieren.

    Jede Tabelle wird unabhängig geprüft, damit manuell angelegte Daten
    nicht überschrieben werden.

    Returns:
        Anzahl der neu angelegten Datensätze je Tabelle
    """
    created = {"spaces": 0, "service_types": 0}

    if db.query(Space).count() == 0:
        db.add_all(Space(**data) for data in DEFAULT_SPACES)
        created["spaces"] = len(DEFAULT_SPACES)

    if db.query(ServiceType).count() == 0:
        db.add_all(ServiceType(**data) for data in DEFAULT_SERVICE_TYPES)
        created["service_types"] = len(DEFAULT_SERVICE_TYPES)

    db.commit()
    if any(created.values()):
        logger.info(f"Seeded default data: {created}")
    return created
