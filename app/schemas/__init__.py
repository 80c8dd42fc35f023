"""Pydantic Schemas für Validierung"""
from app.schemas.space import SpaceCreate, SpaceUpdate, SpaceResponse
from app.schemas.client import ClientCreate, ClientUpdate, ClientResponse
from app.schemas.professional import ProfessionalCreate, ProfessionalUpdate, ProfessionalResponse
from app.schemas.event import EventCreate, EventUpdate, EventResponse
from app.schemas.service import (
    ServiceTypeCreate,
    ServiceTypeResponse,
    ServiceTaskCreate,
    ServiceTaskStatusUpdate,
    ServiceTaskResponse,
)
from app.schemas.transaction import (
    TransactionCreate,
    TransactionUpdate,
    TransactionStatusUpdate,
    TransactionResponse,
)
from app.schemas.financial import DateRange, LedgerFilters
from app.schemas.contract import ContractForm, ContractClause, ContractRequest

__all__ = [
    "SpaceCreate", "SpaceUpdate", "SpaceResponse",
    "ClientCreate", "ClientUpdate", "ClientResponse",
    "ProfessionalCreate", "ProfessionalUpdate", "ProfessionalResponse",
    "EventCreate", "EventUpdate", "EventResponse",
    "ServiceTypeCreate", "ServiceTypeResponse",
    "ServiceTaskCreate", "ServiceTaskStatusUpdate", "ServiceTaskResponse",
    "TransactionCreate", "TransactionUpdate", "TransactionStatusUpdate", "TransactionResponse",
    "DateRange", "LedgerFilters",
    "ContractForm", "ContractClause", "ContractRequest",
]
