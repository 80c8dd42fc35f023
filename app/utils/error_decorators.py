"""Decorator für konsistentes Error-Handling in Services und Routern"""
import logging
from functools import wraps
from typing import Callable, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.utils.error_handler import ServiceResult, handle_service_exception

logger = logging.getLogger(__name__)

# Fehlercode -> HTTP-Status
ERROR_STATUS_CODES = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "validation": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "invalid_input": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "invalid_data": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "db_integrity": status.HTTP_409_CONFLICT,
    "db_error": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def service_operation(operation: str):
    """
    Decorator für Service-Funktionen.

    Der Rückgabewert der dekorierten Funktion wird zu ServiceResult.ok(...),
    jede Exception wird über handle_service_exception in ein
    fehlgeschlagenes ServiceResult übersetzt (inkl. Rollback).

    Args:
        operation: Beschreibung für das Logging (z.B. "Creating transaction")

    Usage:
        @service_operation("Creating transaction")
        def create_transaction(db: Session, data: TransactionCreate) -> Transaction:
            ...  # Logik ohne try/except

    Wichtig:
        - Die Session wird als erstes Argument oder als Keyword 'db' erwartet
        - Gibt die Funktion selbst ein ServiceResult zurück, wird es unverändert durchgereicht
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs) -> ServiceResult:
            db: Optional[Session] = kwargs.get('db')
            if db is None and args and isinstance(args[0], Session):
                db = args[0]

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                return handle_service_exception(e, operation, db)

            if isinstance(result, ServiceResult):
                return result
            return ServiceResult.ok(result)

        return wrapper
    return decorator


def unwrap_result(result: ServiceResult):
    """
    Übersetzt ein ServiceResult für Router in Daten oder HTTPException.

    Raises:
        HTTPException: Bei fehlgeschlagenem Ergebnis mit passendem Status-Code
    """
    if result.success:
        return result.data

    status_code = ERROR_STATUS_CODES.get(result.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise HTTPException(
        status_code=status_code,
        detail={"error": result.error, "error_code": result.error_code},
    )
