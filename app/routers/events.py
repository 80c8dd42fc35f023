"""Events (Buchungen, Besichtigungen, Angebote) Router"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.enums import EventCategory
from app.schemas import EventCreate, EventUpdate, EventResponse
from app.services import event_service
from app.services.reconciliation import reconcile
from app.utils.error_decorators import unwrap_result

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/", response_model=List[EventResponse])
async def list_events(
    start: Optional[date] = None,
    end: Optional[date] = None,
    category: Optional[EventCategory] = None,
    space_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    """Kalendereinträge im Zeitraum, aufsteigend nach Beginn"""
    events = unwrap_result(event_service.list_events(db, start, end, category, space_id))
    return [EventResponse.from_event(e) for e in events]


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: int, db: Session = Depends(get_db)):
    return EventResponse.from_event(unwrap_result(event_service.get_event(db, event_id)))


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(data: EventCreate, db: Session = Depends(get_db)):
    return EventResponse.from_event(unwrap_result(event_service.create_event(db, data)))


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(event_id: int, data: EventUpdate, db: Session = Depends(get_db)):
    return EventResponse.from_event(unwrap_result(event_service.update_event(db, event_id, data)))


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: int, db: Session = Depends(get_db)):
    unwrap_result(event_service.delete_event(db, event_id))


@router.post("/{event_id}/reconcile")
async def reconcile_event(event_id: int, db: Session = Depends(get_db)):
    """Zahlungsstatus manuell neu berechnen (z.B. nach Datenimport)"""
    payment_status = unwrap_result(reconcile(db, event_id))
    if payment_status is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": f"Keine Buchung mit ID {event_id}", "error_code": "not_found"},
        )
    return {"event_id": event_id, "payment_status": payment_status.value}
