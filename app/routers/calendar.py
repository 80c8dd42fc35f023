"""Calendar Router"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.calendar_service import CalendarEntry, calendar_entries
from app.utils.error_decorators import unwrap_result

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/", response_model=List[CalendarEntry])
async def get_calendar(
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: Session = Depends(get_db),
):
    """Buchungen, Serviceeinsätze und offene Zahlungen, nach Beginn sortiert"""
    return unwrap_result(calendar_entries(db, start, end))
