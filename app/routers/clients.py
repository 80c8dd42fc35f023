"""Clients (Kunden) Router"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.database import get_db, transaction
from app.models import Client
from app.schemas import ClientCreate, ClientUpdate, ClientResponse
from app.utils.error_decorators import service_operation, unwrap_result
from app.utils.error_handler import NotFoundError
from app.utils.validators import Validators

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])

SEARCH_LIMIT = 10


def _get_client(db: Session, client_id: int) -> Client:
    client = db.get(Client, client_id)
    if client is None:
        raise NotFoundError("Kunde", client_id)
    return client


@service_operation("Searching clients")
def search_clients(db: Session, term: str) -> List[Client]:
    """Suche nach Name, E-Mail oder Telefon (max. 10 Treffer)"""
    pattern = Validators.like_pattern(term.strip())
    return db.query(Client).filter(or_(
        Client.name.ilike(pattern, escape="\\"),
        Client.email.ilike(pattern, escape="\\"),
        Client.phone.ilike(pattern, escape="\\"),
    )).order_by(Client.name).limit(SEARCH_LIMIT).all()


@service_operation("Loading client")
def get_client_record(db: Session, client_id: int) -> Client:
    return _get_client(db, client_id)


@service_operation("Creating client")
def create_client_record(db: Session, data: ClientCreate) -> Client:
    with transaction(db):
        client = Client(**data.model_dump())
        db.add(client)
    logger.info(f"Client created: {client.id}")
    return client


@service_operation("Updating client")
def update_client_record(db: Session, client_id: int, data: ClientUpdate) -> Client:
    client = _get_client(db, client_id)
    with transaction(db):
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(client, key, value)
    logger.info(f"Client {client_id} updated")
    return client


@service_operation("Deleting client")
def delete_client_record(db: Session, client_id: int) -> None:
    client = _get_client(db, client_id)
    with transaction(db):
        db.delete(client)
    logger.info(f"Client {client_id} deleted")


@router.get("/", response_model=List[ClientResponse])
async def list_clients(
    search: Optional[str] = Query(None, max_length=100),
    db: Session = Depends(get_db),
):
    """Alle Kunden; mit search nur die ersten Treffer"""
    if search and search.strip():
        return unwrap_result(search_clients(db, search))
    return db.query(Client).order_by(Client.name).all()


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(client_id: int, db: Session = Depends(get_db)):
    return unwrap_result(get_client_record(db, client_id))


@router.post("/", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(data: ClientCreate, db: Session = Depends(get_db)):
    return unwrap_result(create_client_record(db, data))


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(client_id: int, data: ClientUpdate, db: Session = Depends(get_db)):
    return unwrap_result(update_client_record(db, client_id, data))


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(client_id: int, db: Session = Depends(get_db)):
    unwrap_result(delete_client_record(db, client_id))
