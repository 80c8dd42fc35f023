"""Contracts (Mietverträge) Router"""
from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas import ContractClause, ContractForm, ContractRequest
from app.services.contract_generator import ContractGenerator, contract_form_for_event, render_contract
from app.services.contract_templates import (
    PAYMENT_METHODS,
    PLACEHOLDERS,
    generate_contract_number,
    get_initial_clauses,
)
from app.utils.error_decorators import service_operation, unwrap_result

router = APIRouter(prefix="/contracts", tags=["contracts"])


@service_operation("Generating contract number")
def _contract_number(db: Session, space_id: int, on: Optional[date]) -> str:
    space = ContractGenerator(db).get_space(space_id)
    return generate_contract_number(space, on)


@router.get("/clauses", response_model=List[ContractClause])
async def list_default_clauses():
    """Standardklauseln als Ausgangspunkt für die Bearbeitung"""
    return get_initial_clauses()


@router.get("/placeholders")
async def list_placeholders() -> Dict[str, object]:
    """Verfügbare Tokens mit Platzhaltertext sowie Zahlungsarten"""
    return {"placeholders": PLACEHOLDERS, "payment_methods": PAYMENT_METHODS}


@router.get("/events/{event_id}/form", response_model=ContractForm)
async def prefill_contract(event_id: int, db: Session = Depends(get_db)):
    """Formulardaten aus einer Buchung vorbelegen"""
    return unwrap_result(contract_form_for_event(db, event_id))


@router.get("/spaces/{space_id}/number")
async def get_contract_number(space_id: int, on: Optional[date] = None, db: Session = Depends(get_db)):
    return {"contract_number": unwrap_result(_contract_number(db, space_id, on))}


@router.post("/spaces/{space_id}/pdf")
async def generate_contract_pdf(space_id: int, request: ContractRequest, db: Session = Depends(get_db)):
    """Mietvertrag als PDF"""
    pdf = unwrap_result(render_contract(db, space_id, request))
    filename = f"Mietvertrag_{request.form.contract_number or space_id}.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
