"""Service für Serviceeinsätze (Reinigung, Gartenpflege, ...)"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from app.database import transaction
from app.models import Event, ServiceTask, ServiceType, Space
from app.models.enums import ServiceTaskStatus, OPEN_SERVICE_TASK_STATUSES
from app.schemas.service import ServiceTaskCreate
from app.utils.datetime_utils import start_of_day, end_of_day
from app.utils.error_decorators import service_operation
from app.utils.error_handler import NotFoundError

logger = logging.getLogger(__name__)


def _task_query(db: Session):
    return db.query(ServiceTask).options(
        joinedload(ServiceTask.service_type),
        joinedload(ServiceTask.space),
        joinedload(ServiceTask.event),
    )


@service_operation("Listing service tasks")
def list_tasks(db: Session, start: Optional[date] = None, end: Optional[date] = None) -> List[ServiceTask]:
    query = _task_query(db)
    if start is not None:
        query = query.filter(ServiceTask.start >= start_of_day(start))
    if end is not None:
        query = query.filter(ServiceTask.start <= end_of_day(end))
    return query.order_by(ServiceTask.start.asc(), ServiceTask.id.asc()).all()


@service_operation("Listing pending service tasks")
def list_pending_tasks(db: Session) -> List[ServiceTask]:
    """Offene Einsätze (pending oder in_progress), nach Beginn sortiert"""
    return _task_query(db).filter(
        ServiceTask.status.in_(OPEN_SERVICE_TASK_STATUSES)
    ).order_by(ServiceTask.start.asc(), ServiceTask.id.asc()).all()


@service_operation("Creating service task")
def create_task(db: Session, data: ServiceTaskCreate) -> ServiceTask:
    if db.get(Space, data.space_id) is None:
        raise NotFoundError("Raum", data.space_id)
    if db.get(ServiceType, data.service_type_id) is None:
        raise NotFoundError("Serviceart", data.service_type_id)
    if data.event_id is not None and db.get(Event, data.event_id) is None:
        raise NotFoundError("Buchung", data.event_id)

    with transaction(db):
        task = ServiceTask(**data.model_dump())
        db.add(task)
        db.flush()
        task_id = task.id

    logger.info(f"Service task {task_id} created (type {data.service_type_id}, space {data.space_id})")
    return _task_query(db).filter(ServiceTask.id == task_id).one()


@service_operation("Updating service task status")
def update_task_status(db: Session, task_id: int, status: ServiceTaskStatus) -> ServiceTask:
    task = _task_query(db).filter(ServiceTask.id == task_id).first()
    if task is None:
        raise NotFoundError("Serviceeinsatz", task_id)

    with transaction(db):
        task.status = status

    logger.info(f"Service task {task_id} marked as {status.value}")
    return task
