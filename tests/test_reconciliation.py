"""Tests für den Zahlungsabgleich von Buchungen"""
import pytest
from decimal import Decimal

from app.database import transaction
from app.models.enums import EventCategory, PaymentStatus, TransactionStatus, TransactionType, TransactionCategory
from app.services.change_notifier import ChangeNotifier, notifier, EVENT_PAYMENT_CHANGED
from app.services.reconciliation import (
    determine_payment_status,
    paid_income_for_event,
    recalculate_event_payment_status,
    reconcile,
    reconcile_many,
)


@pytest.mark.unit
class TestDeterminePaymentStatus:
    """Tests für die reine Statusberechnung"""

    def test_nothing_paid(self):
        """Test: Keine Anzahlung, keine Zahlungen -> unpaid"""
        assert determine_payment_status(Decimal("1000"), Decimal("0"), Decimal("0")) == PaymentStatus.UNPAID

    def test_deposit_only_is_partial(self):
        """Test: Nur Anzahlung -> partial"""
        assert determine_payment_status(Decimal("1000"), Decimal("200"), Decimal("0")) == PaymentStatus.PARTIAL

    def test_exactly_total_is_paid(self):
        """Test: Anzahlung + Zahlungen = Gesamtwert -> paid"""
        assert determine_payment_status(Decimal("1000"), Decimal("200"), Decimal("800")) == PaymentStatus.PAID

    def test_one_cent_missing_is_partial(self):
        assert determine_payment_status(Decimal("1000.00"), Decimal("200.00"), Decimal("799.99")) == PaymentStatus.PARTIAL

    def test_overpayment_is_paid(self):
        assert determine_payment_status(Decimal("1000"), Decimal("0"), Decimal("1500")) == PaymentStatus.PAID

    def test_zero_total_is_paid(self):
        """Test: Gesamtwert 0 gilt immer als bezahlt"""
        assert determine_payment_status(Decimal("0"), Decimal("0"), Decimal("0")) == PaymentStatus.PAID

    def test_deposit_is_clamped_to_total(self):
        """Test: Anzahlung über dem Gesamtwert zählt nur bis zum Gesamtwert"""
        assert determine_payment_status(Decimal("500"), Decimal("800"), Decimal("0")) == PaymentStatus.PAID


@pytest.mark.integration
class TestRecalculateEventPaymentStatus:
    """Tests für den Abgleich gegen die Datenbank"""

    def test_deposit_then_payments(self, db_session, make_event, make_transaction):
        """Test: 1000/200, +300 -> partial, +500 -> paid"""
        event = make_event(total_value="1000.00", deposit="200.00")
        assert recalculate_event_payment_status(db_session, event.id) == PaymentStatus.PARTIAL

        make_transaction(amount="300.00", event=event)
        assert recalculate_event_payment_status(db_session, event.id) == PaymentStatus.PARTIAL

        make_transaction(amount="500.00", event=event)
        assert recalculate_event_payment_status(db_session, event.id) == PaymentStatus.PAID

        db_session.refresh(event)
        assert event.payment_status == PaymentStatus.PAID

    def test_pending_income_is_ignored(self, db_session, make_event, make_transaction):
        """Test: Offene Einnahmen zählen nicht als bezahlt"""
        event = make_event(total_value="1000.00")
        make_transaction(amount="1000.00", event=event, status=TransactionStatus.PENDING)

        assert paid_income_for_event(db_session, event.id) == Decimal("0")
        assert recalculate_event_payment_status(db_session, event.id) == PaymentStatus.UNPAID

    def test_expenses_are_ignored(self, db_session, make_event, make_transaction):
        """Test: Ausgaben mit Buchungsbezug ändern den Zahlungsstatus nicht"""
        event = make_event(total_value="1000.00")
        make_transaction(
            amount="1000.00",
            event=event,
            type=TransactionType.EXPENSE,
            category=TransactionCategory.CLEANING,
        )
        assert recalculate_event_payment_status(db_session, event.id) == PaymentStatus.UNPAID

    def test_idempotent(self, db_session, make_event, make_transaction):
        """Test: Zweimaliger Abgleich ergibt denselben Status"""
        event = make_event(total_value="1000.00", deposit="100.00")
        make_transaction(amount="400.00", event=event)

        first = recalculate_event_payment_status(db_session, event.id)
        second = recalculate_event_payment_status(db_session, event.id)
        assert first == second == PaymentStatus.PARTIAL

    def test_missing_event_returns_none(self, db_session):
        assert recalculate_event_payment_status(db_session, 9999) is None
        assert recalculate_event_payment_status(db_session, None) is None

    def test_non_booking_is_not_touched(self, db_session, make_event):
        """Test: Besichtigungen haben keinen abgeleiteten Zahlungsstatus"""
        visit = make_event(title="Besichtigung", category=EventCategory.VISIT, total_value="0.00")
        assert recalculate_event_payment_status(db_session, visit.id) is None

        db_session.refresh(visit)
        assert visit.payment_status == PaymentStatus.UNPAID

    def test_reconcile_wraps_in_service_result(self, db_session, make_event):
        event = make_event(total_value="0.00")
        result = reconcile(db_session, event.id)
        assert result.success
        assert result.data == PaymentStatus.PAID

    def test_reconcile_many_skips_none_and_duplicates(self, db_session, make_event):
        first = make_event(title="A", total_value="100.00", deposit="100.00")
        second = make_event(title="B", total_value="100.00", deposit="50.00")

        with transaction(db_session):
            changes = reconcile_many(db_session, first.id, None, first.id, second.id)

        assert changes == {
            first.id: (PaymentStatus.UNPAID, PaymentStatus.PAID),
            second.id: (PaymentStatus.UNPAID, PaymentStatus.PARTIAL),
        }
        db_session.refresh(first)
        db_session.refresh(second)
        assert first.payment_status == PaymentStatus.PAID
        assert second.payment_status == PaymentStatus.PARTIAL

    def test_reconcile_many_rolls_back_with_caller(self, db_session, make_event):
        """Test: Abgleich in der Transaktion des Aufrufers wird mit ihr zurückgerollt"""
        event = make_event(total_value="100.00", deposit="100.00")

        with pytest.raises(RuntimeError):
            with transaction(db_session):
                reconcile_many(db_session, event.id)
                raise RuntimeError("Abbruch")

        db_session.refresh(event)
        assert event.payment_status == PaymentStatus.UNPAID


@pytest.mark.integration
class TestPaymentChangeNotification:
    """Tests für die Benachrichtigung nach Statuswechsel"""

    def test_notification_on_change_only(self, db_session, make_event):
        received = []
        notifier.subscribe(EVENT_PAYMENT_CHANGED, received.append)
        try:
            event = make_event(total_value="1000.00", deposit="1000.00")
            recalculate_event_payment_status(db_session, event.id)
            recalculate_event_payment_status(db_session, event.id)
        finally:
            notifier.unsubscribe(EVENT_PAYMENT_CHANGED, received.append)

        assert len(received) == 1
        assert received[0].payload == {"event_id": event.id, "old_status": "unpaid", "new_status": "paid"}


@pytest.mark.unit
class TestChangeNotifier:

    def test_failing_handler_does_not_stop_others(self):
        """Test: Fehler eines Handlers werden geloggt, andere laufen weiter"""
        bus = ChangeNotifier()
        received = []

        def broken(notification):
            raise RuntimeError("kaputt")

        bus.subscribe("topic", broken)
        bus.subscribe("topic", received.append)

        assert bus.publish("topic", {"x": 1}) == 1
        assert received[0].payload == {"x": 1}

    def test_unsubscribe(self):
        bus = ChangeNotifier()
        received = []
        bus.subscribe("topic", received.append)
        bus.unsubscribe("topic", received.append)
        assert bus.publish("topic", {}) == 0
        assert received == []
