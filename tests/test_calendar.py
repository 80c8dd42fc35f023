"""Tests für die Kalenderansicht"""
import pytest
from datetime import date, datetime, timedelta

from app.models import ServiceTask
from app.models.enums import EventCategory, TransactionCategory, TransactionStatus, TransactionType
from app.services.calendar_service import calendar_entries

DAY = date(2026, 3, 14)


@pytest.fixture
def cleaning_task(db_session, sample_space, sample_service_type):
    task = ServiceTask(
        start=datetime(2026, 3, 14, 9, 0),
        space_id=sample_space.id,
        service_type_id=sample_service_type.id,
        responsible="Joana",
    )
    db_session.add(task)
    db_session.commit()
    db_session.refresh(task)
    return task


@pytest.mark.integration
class TestCalendarEntries:
    """Tests für Zusammenführung, Titel und Sortierung"""

    def test_merged_and_sorted_by_start(self, db_session, make_event, make_transaction, cleaning_task):
        make_event(title="Hochzeit Souza")
        make_transaction(
            amount="150.00",
            type=TransactionType.EXPENSE,
            category=TransactionCategory.CLEANING,
            status=TransactionStatus.PENDING,
            description="Zahlung leisten: Reinigung",
            on=DAY,
        )

        entries = calendar_entries(db_session, DAY, DAY).data

        assert [e.type for e in entries] == ["financial", "task", "event"]
        assert entries[0].title == "Zahlung leisten: Reinigung"
        assert entries[1].title == "[Reinigung] Festsaal"
        assert entries[2].title == "Festsaal - Hochzeit Souza"

    def test_task_without_end_lasts_one_hour(self, db_session, cleaning_task):
        entry = calendar_entries(db_session).data[0]
        assert entry.end - entry.start == timedelta(hours=1)
        assert entry.resource["responsible"] == "Joana"

    def test_visit_and_proposal_prefixes(self, db_session, make_event):
        make_event(title="Familie Lima", category=EventCategory.VISIT, start=datetime(2026, 3, 14, 10, 0))
        make_event(title="Firma XY", category=EventCategory.PROPOSAL, start=datetime(2026, 3, 14, 11, 0))

        titles = [e.title for e in calendar_entries(db_session).data]
        assert titles == ["Besichtigung - Familie Lima", "Angebot senden - Firma XY"]

    def test_only_pending_transactions(self, db_session, make_transaction):
        make_transaction(description="Bezahlt", on=DAY)
        make_transaction(description="Rate", status=TransactionStatus.PENDING, on=DAY)

        entries = calendar_entries(db_session).data
        assert [e.title for e in entries] == ["Zahlung erhalten: Rate"]

    def test_range_filter(self, db_session, make_event):
        make_event(start=datetime(2026, 4, 1, 18, 0))
        assert calendar_entries(db_session, DAY, DAY).data == []

    def test_end_before_start_is_rejected(self, db_session):
        result = calendar_entries(db_session, DAY, DAY - timedelta(days=1))
        assert result.error_code == "validation"
