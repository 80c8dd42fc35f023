"""Tests für Finanzübersicht, Prognose und kombinierte Liste"""
import pytest
from datetime import date, datetime
from decimal import Decimal

from app.models.enums import EventCategory, TransactionCategory, TransactionStatus, TransactionType
from app.services.financial_summary import (
    all_financial_data,
    build_financial_summary,
    forecast_summary,
    resolve_period,
    summarize,
    transactions_summary,
)

MARCH_START = date(2026, 3, 1)
MARCH_END = date(2026, 3, 31)


@pytest.fixture
def booked_month(make_event, make_transaction):
    """
    Eine Buchung (1000, Anzahlung 100, 400 bezahlt) plus manuelle Posten:
    200 sonstige Einnahme, 50 Material bezahlt, 150 Reinigung offen.
    """
    event = make_event(total_value="1000.00", deposit="100.00")
    make_transaction(amount="400.00", event=event)
    make_transaction(amount="200.00", category=TransactionCategory.OTHER_INCOME, description="Getränkeverkauf")
    make_transaction(
        amount="50.00",
        type=TransactionType.EXPENSE,
        category=TransactionCategory.SUPPLIES,
        description="Deko",
    )
    make_transaction(
        amount="150.00",
        type=TransactionType.EXPENSE,
        category=TransactionCategory.CLEANING,
        status=TransactionStatus.PENDING,
        description="Reinigung nach Hochzeit",
        on=date(2026, 3, 15),
    )
    return event


@pytest.mark.integration
class TestSummarize:
    """Tests für die Finanzübersicht"""

    def test_linked_income_not_counted_twice(self, db_session, booked_month):
        """Test: Anzahlung 100 + bezahlte 400 ergeben 500 Einnahmen, nicht 900"""
        result = summarize(db_session, MARCH_START, MARCH_END)
        assert result.success
        summary = result.data

        assert summary.event_income.deposits_received == Decimal("500")
        assert summary.event_income.pending_payments == Decimal("500")
        assert summary.event_income.partial_events == 1
        assert summary.manual_income == Decimal("200")
        assert summary.total_income == Decimal("700")

    def test_totals_and_balance(self, db_session, booked_month):
        summary = summarize(db_session, MARCH_START, MARCH_END).data

        assert summary.manual_expense == Decimal("50")
        assert summary.total_expense == Decimal("50")
        assert summary.balance == Decimal("650")

    def test_pending_only_in_forecast(self, db_session, booked_month):
        """Test: Offene Posten zählen nur zur Prognose, nicht zu den Summen"""
        summary = summarize(db_session, MARCH_START, MARCH_END).data

        assert summary.service_pending_total == Decimal("150")
        assert summary.forecast.total_forecast_expense == Decimal("150")
        assert summary.forecast.service_pending_expense == Decimal("150")
        assert summary.forecast.total_forecast_income == Decimal("0")
        assert "cleaning" not in summary.by_category

    def test_breakdowns(self, db_session, booked_month):
        summary = summarize(db_session, MARCH_START, MARCH_END).data

        assert summary.by_category["event_payment"].income == Decimal("500")
        assert summary.by_category["other_income"].income == Decimal("200")
        assert summary.by_category["supplies"].expense == Decimal("50")

        march = summary.by_month["2026-03"]
        assert march.income == Decimal("700")
        assert march.expense == Decimal("50")
        assert march.events == 1

        assert summary.by_space["Festsaal"].income == Decimal("500")
        assert summary.by_space["Festsaal"].events == 1

    def test_deposit_above_total_is_clamped(self, db_session, make_event):
        make_event(total_value="500.00", deposit="800.00")
        summary = summarize(db_session).data

        assert summary.event_income.deposits_received == Decimal("500")
        assert summary.event_income.pending_payments == Decimal("0")
        assert summary.event_income.paid_events == 1

    def test_zero_value_event(self, db_session, make_event):
        """Test: Buchung ohne Wert gilt als bezahlt, Quote bleibt 0"""
        make_event(total_value="0.00")
        summary = summarize(db_session).data

        assert summary.event_income.paid_events == 1
        assert summary.event_income.collection_rate == 0.0

    def test_visits_are_not_income(self, db_session, make_event):
        make_event(title="Besichtigung", category=EventCategory.VISIT, total_value="999.00")
        summary = summarize(db_session).data

        assert summary.event_income.event_count == 0
        assert summary.total_income == Decimal("0")

    def test_range_excludes_other_months(self, db_session, make_event):
        make_event(start=datetime(2026, 4, 2, 18, 0), total_value="300.00", deposit="300.00")
        summary = summarize(db_session, MARCH_START, MARCH_END).data
        assert summary.event_income.event_count == 0

    def test_end_before_start_is_rejected(self, db_session):
        result = summarize(db_session, MARCH_END, MARCH_START)
        assert not result.success
        assert result.error_code == "validation"

    def test_empty_database(self, db_session):
        summary = summarize(db_session).data
        assert summary.balance == Decimal("0")
        assert summary.by_month == {}


@pytest.mark.unit
class TestBuildFinancialSummary:

    def test_no_input(self):
        summary = build_financial_summary([], [], {})
        assert summary.total_income == Decimal("0")
        assert summary.event_income.event_count == 0


@pytest.mark.integration
class TestForecastAndTransactionsSummary:

    def test_forecast_window(self, db_session, booked_month, make_transaction):
        make_transaction(
            amount="700.00",
            status=TransactionStatus.PENDING,
            category=TransactionCategory.RENTAL_INSTALLMENT,
            on=date(2026, 3, 20),
        )
        make_transaction(amount="999.00", status=TransactionStatus.PENDING, on=date(2026, 5, 1))

        forecast = forecast_summary(db_session, date(2026, 3, 12), date(2026, 3, 31)).data

        assert forecast.pending_count == 2
        assert forecast.totals.total_forecast_income == Decimal("700")
        assert forecast.totals.total_forecast_expense == Decimal("150")
        assert forecast.totals.service_pending_expense == Decimal("150")
        assert forecast.by_category == {"rental_installment": Decimal("700"), "cleaning": Decimal("150")}

    def test_transactions_summary_counts_paid_only(self, db_session, booked_month):
        summary = transactions_summary(db_session, MARCH_START, MARCH_END).data

        # 400 (verknüpft) + 200 manuell, die offene Reinigung fehlt
        assert summary.total_income == Decimal("600")
        assert summary.total_expense == Decimal("50")
        assert summary.balance == Decimal("550")
        assert "cleaning" not in summary.by_category


@pytest.mark.integration
class TestAllFinancialData:

    def test_combined_and_sorted(self, db_session, booked_month, make_event):
        make_event(title="Besichtigung", category=EventCategory.VISIT)
        entries = all_financial_data(db_session).data

        sources = {entry.source for entry in entries}
        assert sources == {"event", "manual"}
        assert len([e for e in entries if e.source == "event"]) == 1
        assert len([e for e in entries if e.source == "manual"]) == 4

        dates = [entry.date for entry in entries]
        assert dates == sorted(dates, reverse=True)
        assert entries[0].id == "transaction-4"  # 15.03. ist das späteste Datum

    def test_event_entry_fields(self, db_session, booked_month):
        event_entry = next(e for e in all_financial_data(db_session).data if e.source == "event")

        assert event_entry.id == f"event-{booked_month.id}"
        assert event_entry.type == TransactionType.INCOME
        assert event_entry.amount == Decimal("1000")
        assert event_entry.deposit_amount == Decimal("100")
        assert event_entry.space_name == "Festsaal"


@pytest.mark.unit
class TestResolvePeriod:

    def test_named_periods(self):
        reference = date(2026, 10, 19)
        assert resolve_period("month", reference).data == (date(2026, 10, 1), date(2026, 10, 31))
        assert resolve_period("last3months", reference).data == (date(2026, 8, 1), date(2026, 10, 31))
        assert resolve_period("year", reference).data == (date(2026, 1, 1), date(2026, 12, 31))
        assert resolve_period("all", reference).data == (None, None)

    def test_unknown_period(self):
        result = resolve_period("decade")
        assert not result.success
        assert result.error_code == "invalid_input"
