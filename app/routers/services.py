"""Services (Servicearten und Serviceeinsätze) Router"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db, transaction
from app.models import ServiceType
from app.schemas import (
    ServiceTypeCreate,
    ServiceTypeResponse,
    ServiceTaskCreate,
    ServiceTaskStatusUpdate,
    ServiceTaskResponse,
)
from app.services import service_task_service
from app.utils.error_decorators import service_operation, unwrap_result

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/services", tags=["services"])


@service_operation("Creating service type")
def create_service_type_record(db: Session, data: ServiceTypeCreate) -> ServiceType:
    with transaction(db):
        service_type = ServiceType(**data.model_dump())
        db.add(service_type)
    logger.info(f"Service type created: {service_type.name}")
    return service_type


@router.get("/types", response_model=List[ServiceTypeResponse])
async def list_service_types(db: Session = Depends(get_db)):
    return db.query(ServiceType).order_by(ServiceType.name).all()


@router.post("/types", response_model=ServiceTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_service_type(data: ServiceTypeCreate, db: Session = Depends(get_db)):
    return unwrap_result(create_service_type_record(db, data))


@router.get("/tasks", response_model=List[ServiceTaskResponse])
async def list_service_tasks(
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: Session = Depends(get_db),
):
    tasks = unwrap_result(service_task_service.list_tasks(db, start, end))
    return [ServiceTaskResponse.from_task(t) for t in tasks]


@router.get("/tasks/pending", response_model=List[ServiceTaskResponse])
async def list_pending_service_tasks(db: Session = Depends(get_db)):
    """Offene Einsätze (pending/in_progress)"""
    tasks = unwrap_result(service_task_service.list_pending_tasks(db))
    return [ServiceTaskResponse.from_task(t) for t in tasks]


@router.post("/tasks", response_model=ServiceTaskResponse, status_code=status.HTTP_201_CREATED)
async def create_service_task(data: ServiceTaskCreate, db: Session = Depends(get_db)):
    return ServiceTaskResponse.from_task(unwrap_result(service_task_service.create_task(db, data)))


@router.patch("/tasks/{task_id}/status", response_model=ServiceTaskResponse)
async def update_service_task_status(
    task_id: int,
    data: ServiceTaskStatusUpdate,
    db: Session = Depends(get_db),
):
    task = unwrap_result(service_task_service.update_task_status(db, task_id, data.status))
    return ServiceTaskResponse.from_task(task)
