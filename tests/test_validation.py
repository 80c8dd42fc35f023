"""Tests für Pydantic-Validierung (Kunden, Buchungen, Transaktionen, Filter)"""
import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from pydantic import ValidationError

from app.models.enums import EventCategory, EventStatus, TransactionCategory, TransactionStatus, TransactionType
from app.schemas import (
    ClientCreate,
    DateRange,
    EventCreate,
    EventUpdate,
    LedgerFilters,
    ServiceTaskCreate,
    SpaceCreate,
    TransactionCreate,
)
from app.utils.datetime_utils import to_local_naive
from app.utils.money import clamp_deposit, format_currency, to_decimal
from app.utils.validators import Validators


@pytest.mark.unit
class TestClientValidation:
    """Tests für Kunden-Validierung"""

    def test_valid_client(self):
        client = ClientCreate(name="  Ana Souza ", email="ana@example.com", phone="+55 (19) 99999-0000")
        assert client.name == "Ana Souza"

    def test_empty_email_becomes_none(self):
        assert ClientCreate(name="Ana", email="   ").email is None

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc_info:
            ClientCreate(name="Ana", email="keine-mail")
        assert "Ungültige E-Mail-Adresse" in str(exc_info.value)

    def test_invalid_phone(self):
        with pytest.raises(ValidationError):
            ClientCreate(name="Ana", phone="abc")

    def test_blank_name(self):
        with pytest.raises(ValidationError):
            ClientCreate(name="   ")


@pytest.mark.unit
class TestSpaceValidation:

    def test_prefix_is_uppercased(self):
        assert SpaceCreate(name="Estância", contract_prefix="est").contract_prefix == "EST"

    def test_empty_prefix_becomes_none(self):
        assert SpaceCreate(name="Estância", contract_prefix=" ").contract_prefix is None


@pytest.mark.unit
class TestEventValidation:
    """Tests für Kalendereinträge"""

    def base(self, **kwargs):
        values = dict(
            title="Hochzeit",
            start=datetime(2026, 6, 1, 18, 0),
            end=datetime(2026, 6, 1, 23, 0),
            space_id=1,
        )
        values.update(kwargs)
        return EventCreate(**values)

    def test_default_status_per_category(self):
        assert self.base().status == EventStatus.CONFIRMING
        assert self.base(category=EventCategory.VISIT).status == EventStatus.VISIT_SCHEDULED
        assert self.base(category=EventCategory.PROPOSAL).status == EventStatus.PROPOSAL_PENDING

    def test_status_must_fit_category(self):
        with pytest.raises(ValidationError):
            self.base(category=EventCategory.EVENT, status=EventStatus.VISIT_DONE)

    def test_payment_status_is_not_accepted(self):
        """Test: Zahlungsstatus wird abgeleitet, nicht eingegeben"""
        with pytest.raises(ValidationError):
            self.base(payment_status="paid")

    def test_negative_values(self):
        with pytest.raises(ValidationError):
            self.base(deposit=Decimal("-1"))

    def test_deposit_above_total_is_kept(self):
        """Test: Die Anzahlung wird gespeichert wie eingegeben, gekappt wird nur beim Rechnen"""
        assert self.base(total_value=Decimal("500"), deposit=Decimal("800")).deposit == Decimal("800")

    def test_empty_client_id(self):
        assert self.base(client_id="").client_id is None

    def test_mixed_timezones_are_comparable(self):
        """Test: Naiver Beginn und Ende mit Zeitzone werfen keinen TypeError"""
        event = self.base(start="2026-03-14T18:00:00", end="2026-03-16T23:00:00Z")
        assert event.start.tzinfo is None
        assert event.end.tzinfo is None

    def test_mixed_timezones_end_before_start(self):
        with pytest.raises(ValidationError):
            self.base(start="2026-03-14T18:00:00", end="2026-03-12T23:00:00Z")

    def test_update_end_with_timezone_becomes_naive(self):
        update = EventUpdate(end="2026-03-14T23:30:00+00:00")
        assert update.end.tzinfo is None
        assert EventUpdate(title="Neu").end is None


@pytest.mark.unit
class TestTransactionValidation:

    def test_expense_category_for_expense(self):
        t = TransactionCreate(
            type=TransactionType.EXPENSE,
            category=TransactionCategory.CLEANING,
            description="Reinigung",
            amount=Decimal("150"),
            date=date(2026, 3, 1),
            status=TransactionStatus.PENDING,
        )
        assert t.paid_at is None

    def test_expense_with_income_category(self):
        with pytest.raises(ValidationError):
            TransactionCreate(
                type=TransactionType.EXPENSE,
                category=TransactionCategory.RENTAL,
                description="Falsch",
                amount=Decimal("1"),
                date=date(2026, 3, 1),
            )

    def test_unknown_fields_are_rejected(self):
        with pytest.raises(ValidationError):
            TransactionCreate(
                type=TransactionType.INCOME,
                category=TransactionCategory.RENTAL,
                description="Miete",
                amount=Decimal("1"),
                date=date(2026, 3, 1),
                source="event",
            )

    def test_too_many_decimals(self):
        with pytest.raises(ValidationError):
            TransactionCreate(
                type=TransactionType.INCOME,
                category=TransactionCategory.RENTAL,
                description="Miete",
                amount=Decimal("1.005"),
                date=date(2026, 3, 1),
            )


@pytest.mark.unit
class TestFilterValidation:

    def test_open_ranges(self):
        assert DateRange(start=date(2026, 1, 1)).end is None
        assert DateRange(end=date(2026, 1, 1)).start is None

    def test_end_before_start(self):
        with pytest.raises(ValidationError) as exc_info:
            DateRange(start=date(2026, 2, 1), end=date(2026, 1, 1))
        assert "Enddatum darf nicht vor dem Startdatum liegen" in str(exc_info.value)

    def test_same_day_is_valid(self):
        DateRange(start=date(2026, 2, 1), end=date(2026, 2, 1))

    def test_ledger_filters_all_and_empty(self):
        filters = LedgerFilters(type="all", category="", status="ALL", search="  ")
        assert filters.type is None
        assert filters.category is None
        assert filters.status is None
        assert filters.search is None

    def test_ledger_filters_unknown_category(self):
        with pytest.raises(ValidationError):
            LedgerFilters(category="lottery")

    def test_service_task_period(self):
        with pytest.raises(ValidationError):
            ServiceTaskCreate(
                start=datetime(2026, 3, 1, 10, 0),
                end=datetime(2026, 3, 1, 9, 0),
                space_id=1,
                service_type_id=1,
            )


@pytest.mark.unit
class TestHelpers:

    def test_like_pattern_escapes_wildcards(self):
        assert Validators.like_pattern("abc") == "%abc%"
        assert Validators.like_pattern("50%_off") == "%50\\%\\_off%"
        assert Validators.like_pattern("a\\b") == "%a\\\\b%"

    def test_to_local_naive(self):
        naive = datetime(2026, 3, 14, 18, 0)
        assert to_local_naive(naive) is naive
        assert to_local_naive(None) is None

        aware = datetime(2026, 3, 14, 18, 0, tzinfo=timezone.utc)
        converted = to_local_naive(aware)
        assert converted.tzinfo is None
        assert converted == aware.astimezone().replace(tzinfo=None)

    def test_to_decimal(self):
        assert to_decimal(None) == Decimal("0")
        assert to_decimal("1500,50") == Decimal("1500.50")
        assert to_decimal(0.1) == Decimal("0.1")
        with pytest.raises(ValueError):
            to_decimal("abc")

    def test_clamp_deposit(self):
        assert clamp_deposit(Decimal("800"), Decimal("500")) == Decimal("500")
        assert clamp_deposit(Decimal("100"), Decimal("500")) == Decimal("100")

    def test_format_currency(self):
        assert format_currency(Decimal("-1234.567"), "R$") == "-R$ 1.234,57"
        assert format_currency(None) == ""
