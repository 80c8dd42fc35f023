"""Professionals (Dienstleister) Router"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db, transaction
from app.models import Professional
from app.schemas import ProfessionalCreate, ProfessionalUpdate, ProfessionalResponse
from app.utils.error_decorators import service_operation, unwrap_result
from app.utils.error_handler import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/professionals", tags=["professionals"])


def _get_professional(db: Session, professional_id: int) -> Professional:
    professional = db.get(Professional, professional_id)
    if professional is None:
        raise NotFoundError("Dienstleister", professional_id)
    return professional


@service_operation("Creating professional")
def create_professional_record(db: Session, data: ProfessionalCreate) -> Professional:
    with transaction(db):
        professional = Professional(**data.model_dump())
        db.add(professional)
    logger.info(f"Professional created: {professional.id}")
    return professional


@service_operation("Updating professional")
def update_professional_record(db: Session, professional_id: int, data: ProfessionalUpdate) -> Professional:
    professional = _get_professional(db, professional_id)
    changes = data.model_dump(exclude_unset=True)
    for key in ("name", "type"):
        if key in changes and not (changes[key] or "").strip():
            raise ValueError(f"{key} darf nicht leer sein")
    with transaction(db):
        for key, value in changes.items():
            setattr(professional, key, value)
    logger.info(f"Professional {professional_id} updated")
    return professional


@service_operation("Deleting professional")
def delete_professional_record(db: Session, professional_id: int) -> None:
    professional = _get_professional(db, professional_id)
    with transaction(db):
        db.delete(professional)
    logger.info(f"Professional {professional_id} deleted")


@router.get("/", response_model=List[ProfessionalResponse])
async def list_professionals(db: Session = Depends(get_db)):
    return db.query(Professional).order_by(Professional.name).all()


@router.post("/", response_model=ProfessionalResponse, status_code=status.HTTP_201_CREATED)
async def create_professional(data: ProfessionalCreate, db: Session = Depends(get_db)):
    return unwrap_result(create_professional_record(db, data))


@router.put("/{professional_id}", response_model=ProfessionalResponse)
async def update_professional(professional_id: int, data: ProfessionalUpdate, db: Session = Depends(get_db)):
    return unwrap_result(update_professional_record(db, professional_id, data))


@router.delete("/{professional_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_professional(professional_id: int, db: Session = Depends(get_db)):
    unwrap_result(delete_professional_record(db, professional_id))
