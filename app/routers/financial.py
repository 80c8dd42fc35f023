"""Financial (Finanzübersicht, Prognose, Ledger, Exporte) Router"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.services import financial_summary, ledger, ledger_export
from app.services.financial_summary import (
    FinancialSummary,
    ForecastSummary,
    TransactionsSummary,
    FinancialEntry,
)
from app.services.ledger import LedgerResult
from app.utils.error_decorators import unwrap_result

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/financial", tags=["financial"])

EXPORT_FORMATS = {
    "xlsx": ("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", ledger_export.ledger_to_excel),
    "csv": ("text/csv", ledger_export.ledger_to_csv),
    "pdf": ("application/pdf", ledger_export.ledger_to_pdf),
}


def ledger_filter_params(
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
) -> dict:
    """
    Rohe Filterwerte; Validierung (Enums, Datumsformat, Zeitraum) erfolgt
    im Ledger-Service, damit Fehler einheitlich gemeldet werden.
    """
    return {
        "start": start,
        "end": end,
        "type": type,
        "category": category,
        "status": status,
        "search": search,
    }


@router.get("/summary", response_model=FinancialSummary)
async def get_summary(
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: Session = Depends(get_db),
):
    """Finanzübersicht für einen optionalen Zeitraum"""
    return unwrap_result(financial_summary.summarize(db, start, end))


@router.get("/period/{period}", response_model=FinancialSummary)
async def get_period_summary(period: str, db: Session = Depends(get_db)):
    """Finanzübersicht für month, last3months, year oder all"""
    start, end = unwrap_result(financial_summary.resolve_period(period))
    return unwrap_result(financial_summary.summarize(db, start, end))


@router.get("/forecast", response_model=ForecastSummary)
async def get_forecast(
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: Session = Depends(get_db),
):
    return unwrap_result(financial_summary.forecast_summary(db, start, end))


@router.get("/transactions-summary", response_model=TransactionsSummary)
async def get_transactions_summary(
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: Session = Depends(get_db),
):
    return unwrap_result(financial_summary.transactions_summary(db, start, end))


@router.get("/entries", response_model=List[FinancialEntry])
async def get_entries(
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: Session = Depends(get_db),
):
    """Buchungen und manuelle Transaktionen kombiniert, neueste zuerst"""
    return unwrap_result(financial_summary.all_financial_data(db, start, end))


@router.get("/ledger", response_model=LedgerResult)
async def get_ledger(
    filters: dict = Depends(ledger_filter_params),
    db: Session = Depends(get_db),
):
    return unwrap_result(ledger.list_ledger(db, filters))


@router.get("/ledger/export/{fmt}")
async def export_ledger(
    fmt: str,
    filters: dict = Depends(ledger_filter_params),
    db: Session = Depends(get_db),
):
    """Ledger als Excel (xlsx), CSV oder PDF"""
    if fmt not in EXPORT_FORMATS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": f"Unbekanntes Exportformat: {fmt}", "error_code": "not_found"},
        )
    media_type, render = EXPORT_FORMATS[fmt]

    result = unwrap_result(ledger.list_ledger(db, filters))
    filename = ledger_export.export_filename(fmt)
    return Response(
        content=render(result),
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
