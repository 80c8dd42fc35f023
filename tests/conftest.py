"""Pytest Fixtures und Test-Konfiguration"""
import pytest
from datetime import date, datetime
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.models import Client, Event, ServiceTask, ServiceType, Space, Transaction
from app.models.enums import (
    EventCategory,
    EventStatus,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
    DEFAULT_EVENT_STATUS,
)


@pytest.fixture(scope="function")
def db_session() -> Session:
    """
    Erstellt eine temporäre In-Memory-SQLite-Datenbank für Tests
    Jeder Test bekommt eine frische, isolierte Datenbank
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Alle Tabellen erstellen
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def api_client(db_session: Session) -> TestClient:
    """
    HTTP-Client gegen die App, get_db liefert die Test-Session.

    Ohne 'with', damit der Lifespan (Migrationen, Demo-Daten) nicht läuft.
    """
    from app.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_space(db_session: Session) -> Space:
    """Erstellt einen Beispiel-Raum"""
    space = Space(
        name="Festsaal",
        address="Rua das Flores 10",
        city="Campinas",
        state="SP",
        owner_name="Maria Vermieterin",
        owner_document="123.456.789-00",
        owner_role="Eigentümerin",
        contract_prefix="FES",
    )
    db_session.add(space)
    db_session.commit()
    db_session.refresh(space)
    return space


@pytest.fixture
def sample_client(db_session: Session) -> Client:
    """Erstellt einen Beispiel-Kunden"""
    client = Client(
        name="Ana Souza",
        phone="+55 19 99999-0000",
        email="ana@example.com",
        document="987.654.321-00",
        address="Av. Brasil 100",
    )
    db_session.add(client)
    db_session.commit()
    db_session.refresh(client)
    return client


@pytest.fixture
def sample_service_type(db_session: Session) -> ServiceType:
    service_type = ServiceType(name="Reinigung", description="Allgemeine Reinigung")
    db_session.add(service_type)
    db_session.commit()
    db_session.refresh(service_type)
    return service_type


@pytest.fixture
def make_event(db_session: Session, sample_space: Space):
    """Factory für Kalendereinträge (direkt über das ORM, ohne Abgleich)"""
    def _make(
        title: str = "Hochzeit Souza",
        total_value="1000.00",
        deposit="0.00",
        start: datetime = datetime(2026, 3, 14, 18, 0),
        category: EventCategory = EventCategory.EVENT,
        status: EventStatus = None,
        client: Client = None,
        space: Space = None,
    ) -> Event:
        event = Event(
            title=title,
            category=category,
            status=status or DEFAULT_EVENT_STATUS[category],
            start=start,
            end=start.replace(hour=23),
            total_value=Decimal(total_value),
            deposit=Decimal(deposit),
            space_id=(space or sample_space).id,
            client_id=client.id if client else None,
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event
    return _make


@pytest.fixture
def make_transaction(db_session: Session):
    """Factory für Transaktionen (direkt über das ORM, ohne Abgleich)"""
    def _make(
        amount="100.00",
        type: TransactionType = TransactionType.INCOME,
        category: TransactionCategory = None,
        status: TransactionStatus = TransactionStatus.PAID,
        on: date = date(2026, 3, 10),
        description: str = "Zahlung",
        event: Event = None,
        service_task: ServiceTask = None,
        notes: str = None,
    ) -> Transaction:
        if category is None:
            category = (
                TransactionCategory.EVENT_PAYMENT
                if type == TransactionType.INCOME
                else TransactionCategory.OTHER_EXPENSE
            )
        t = Transaction(
            type=type,
            category=category,
            description=description,
            amount=Decimal(amount),
            date=on,
            status=status,
            notes=notes,
            event_id=event.id if event else None,
            service_task_id=service_task.id if service_task else None,
        )
        db_session.add(t)
        db_session.commit()
        db_session.refresh(t)
        return t
    return _make
