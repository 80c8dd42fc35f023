"""Transactions (manuelle Einnahmen/Ausgaben) Router"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas import (
    TransactionCreate,
    TransactionUpdate,
    TransactionStatusUpdate,
    TransactionResponse,
)
from app.services import transaction_service
from app.utils.error_decorators import unwrap_result

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("/", response_model=List[TransactionResponse])
async def list_transactions(
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: Session = Depends(get_db),
):
    return unwrap_result(transaction_service.list_transactions(db, start, end))


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(transaction_id: int, db: Session = Depends(get_db)):
    return unwrap_result(transaction_service.get_transaction(db, transaction_id))


@router.post("/", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(data: TransactionCreate, db: Session = Depends(get_db)):
    return unwrap_result(transaction_service.create_transaction(db, data))


@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(transaction_id: int, data: TransactionUpdate, db: Session = Depends(get_db)):
    return unwrap_result(transaction_service.update_transaction(db, transaction_id, data))


@router.patch("/{transaction_id}/status", response_model=TransactionResponse)
async def update_transaction_status(
    transaction_id: int,
    data: TransactionStatusUpdate,
    db: Session = Depends(get_db),
):
    """Als bezahlt bzw. offen markieren"""
    return unwrap_result(transaction_service.update_status(db, transaction_id, data))


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(transaction_id: int, db: Session = Depends(get_db)):
    unwrap_result(transaction_service.delete_transaction(db, transaction_id))
