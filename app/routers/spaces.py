"""Spaces (Räume) Router"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db, transaction
from app.models import Space
from app.schemas import SpaceCreate, SpaceUpdate, SpaceResponse
from app.utils.error_decorators import service_operation, unwrap_result
from app.utils.error_handler import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/spaces", tags=["spaces"])


def _get_space(db: Session, space_id: int) -> Space:
    space = db.get(Space, space_id)
    if space is None:
        raise NotFoundError("Raum", space_id)
    return space


@service_operation("Loading space")
def get_space_record(db: Session, space_id: int) -> Space:
    return _get_space(db, space_id)


@service_operation("Creating space")
def create_space_record(db: Session, data: SpaceCreate) -> Space:
    with transaction(db):
        space = Space(**data.model_dump())
        db.add(space)
    logger.info(f"Space created: {space.name}")
    return space


@service_operation("Updating space")
def update_space_record(db: Session, space_id: int, data: SpaceUpdate) -> Space:
    space = _get_space(db, space_id)
    with transaction(db):
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(space, key, value)
    logger.info(f"Space {space_id} updated")
    return space


@service_operation("Deleting space")
def delete_space_record(db: Session, space_id: int) -> None:
    space = _get_space(db, space_id)
    if space.events or space.service_tasks:
        raise ValueError("Raum hat noch Buchungen oder Serviceeinsätze und kann nur deaktiviert werden")
    with transaction(db):
        db.delete(space)
    logger.info(f"Space {space_id} deleted")


@router.get("/", response_model=List[SpaceResponse])
async def list_spaces(active_only: bool = False, db: Session = Depends(get_db)):
    """Alle Räume, alphabetisch"""
    query = db.query(Space)
    if active_only:
        query = query.filter(Space.active == True)  # noqa: E712
    return query.order_by(Space.name).all()


@router.get("/{space_id}", response_model=SpaceResponse)
async def get_space(space_id: int, db: Session = Depends(get_db)):
    return unwrap_result(get_space_record(db, space_id))


@router.post("/", response_model=SpaceResponse, status_code=status.HTTP_201_CREATED)
async def create_space(data: SpaceCreate, db: Session = Depends(get_db)):
    return unwrap_result(create_space_record(db, data))


@router.put("/{space_id}", response_model=SpaceResponse)
async def update_space(space_id: int, data: SpaceUpdate, db: Session = Depends(get_db)):
    return unwrap_result(update_space_record(db, space_id, data))


@router.delete("/{space_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_space(space_id: int, db: Session = Depends(get_db)):
    unwrap_result(delete_space_record(db, space_id))
