"""Error Handler Utility - Zentralisierte Fehlerbehandlung"""
import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, DataError, OperationalError, SQLAlchemyError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class NotFoundError(LookupError):
    """Referenzierter Datensatz (Buchung, Transaktion, ...) existiert nicht"""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} mit ID {entity_id} nicht gefunden")


@dataclass
class ServiceResult(Generic[T]):
    """
    Ergebnis einer Service-Operation.

    Services werfen keine Exceptions über ihre Grenze hinaus, sondern
    liefern entweder data (success=True) oder eine Fehlermeldung mit
    Fehlercode (success=False).
    """
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "ServiceResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, error_code: str = "unexpected") -> "ServiceResult[T]":
        return cls(success=False, error=error, error_code=error_code)


def _first_validation_message(e: ValidationError) -> str:
    """Ersten Pydantic-Fehler für eine benutzerfreundliche Meldung extrahieren"""
    first_error = e.errors()[0]
    field_name = first_error['loc'][0] if first_error['loc'] else 'Unbekannt'
    return f"Validierungsfehler ({field_name}): {first_error['msg']}"


def handle_service_exception(
    e: Exception,
    operation: str,
    db_session=None,
) -> ServiceResult:
    """
    Zentralisierte Fehlerbehandlung mit Logging und Fehlercodes

    Args:
        e: Die aufgetretene Exception
        operation: Beschreibung der Operation (für Logging)
        db_session: Datenbank-Session für Rollback (optional)

    Returns:
        Fehlgeschlagenes ServiceResult mit entsprechendem Error-Code
    """
    # Rollback falls Session vorhanden
    if db_session is not None:
        try:
            db_session.rollback()
        except SQLAlchemyError as rollback_error:
            logger.error(f"Rollback failed: {rollback_error}")

    if isinstance(e, NotFoundError):
        logger.info(f"{operation}: {e}")
        return ServiceResult.fail(str(e), "not_found")

    # ValidationError ist eine ValueError-Unterklasse, daher zuerst prüfen
    if isinstance(e, ValidationError):
        logger.warning(f"{operation}: Validation error - {e}")
        return ServiceResult.fail(_first_validation_message(e), "validation")

    if isinstance(e, ValueError):
        logger.warning(f"{operation}: Invalid input - {e}")
        return ServiceResult.fail(f"Ungültige Eingabe: {e}", "invalid_input")

    if isinstance(e, IntegrityError):
        logger.error(f"{operation}: Database integrity error - {e}", exc_info=True)
        return ServiceResult.fail(
            "Datenbankfehler: Diese Daten verletzen eine Integritätsbedingung.",
            "db_integrity",
        )

    if isinstance(e, DataError):
        logger.error(f"{operation}: Invalid data - {e}", exc_info=True)
        return ServiceResult.fail("Ungültige Daten. Bitte überprüfen Sie Ihre Eingaben.", "invalid_data")

    if isinstance(e, OperationalError):
        logger.error(f"{operation}: Database operational error - {e}", exc_info=True)
        return ServiceResult.fail(
            "Datenbankverbindungsfehler. Bitte versuchen Sie es später erneut.",
            "db_error",
        )

    if isinstance(e, SQLAlchemyError):
        logger.error(f"{operation}: Database error - {e}", exc_info=True)
        return ServiceResult.fail("Datenbankfehler. Bitte versuchen Sie es später erneut.", "db_error")

    logger.exception(f"{operation}: Unexpected error - {e}")
    return ServiceResult.fail(
        "Ein unerwarteter Fehler ist aufgetreten. Bitte kontaktieren Sie den Administrator.",
        "unexpected",
    )
