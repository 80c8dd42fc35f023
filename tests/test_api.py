"""Tests über die HTTP-Schnittstelle (FastAPI TestClient)"""
import pytest
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from app.services import reconciliation


def create_event(api_client, space_id, **kwargs):
    payload = {
        "title": "Hochzeit Souza",
        "start": "2026-03-14T18:00:00",
        "end": "2026-03-14T23:00:00",
        "total_value": "1000.00",
        "deposit": "200.00",
        "space_id": space_id,
    }
    payload.update(kwargs)
    response = api_client.post("/events/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def create_payment(api_client, event_id, amount, status="paid", on="2026-03-10"):
    response = api_client.post("/transactions/", json={
        "type": "income",
        "category": "event_payment",
        "description": "Zahlung",
        "amount": amount,
        "date": on,
        "status": status,
        "event_id": event_id,
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.integration
class TestHealthAndMasterData:

    def test_health(self, api_client):
        response = api_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_space_crud(self, api_client):
        response = api_client.post("/spaces/", json={"name": "Estância", "contract_prefix": "est"})
        assert response.status_code == 201
        space = response.json()
        assert space["contract_prefix"] == "EST"

        response = api_client.put(f"/spaces/{space['id']}", json={"city": "Itu"})
        assert response.json()["city"] == "Itu"

        assert api_client.delete(f"/spaces/{space['id']}").status_code == 204
        assert api_client.get(f"/spaces/{space['id']}").status_code == 404

    def test_space_with_events_cannot_be_deleted(self, api_client, sample_space):
        create_event(api_client, sample_space.id)
        response = api_client.delete(f"/spaces/{sample_space.id}")
        assert response.status_code == 422
        assert response.json()["detail"]["error_code"] == "invalid_input"

    def test_client_search(self, api_client, sample_client):
        response = api_client.get("/clients/", params={"search": "souza"})
        assert [c["name"] for c in response.json()] == ["Ana Souza"]


@pytest.mark.integration
class TestEventsAndTransactions:
    """Buchung anlegen, Zahlungen erfassen, Status verfolgen"""

    def test_payment_flow(self, api_client, sample_space):
        event = create_event(api_client, sample_space.id)
        assert event["payment_status"] == "partial"

        create_payment(api_client, event["id"], "300.00")
        assert api_client.get(f"/events/{event['id']}").json()["payment_status"] == "partial"

        create_payment(api_client, event["id"], "500.00")
        assert api_client.get(f"/events/{event['id']}").json()["payment_status"] == "paid"

    def test_mark_pending_payment_as_paid(self, api_client, sample_space):
        event = create_event(api_client, sample_space.id, deposit="0.00")
        payment = create_payment(api_client, event["id"], "1000.00", status="pending")
        assert payment["paid_at"] is None

        response = api_client.patch(f"/transactions/{payment['id']}/status", json={"status": "paid"})
        assert response.status_code == 200
        assert response.json()["paid_at"] is not None
        assert api_client.get(f"/events/{event['id']}").json()["payment_status"] == "paid"

    def test_payment_status_is_not_writable(self, api_client, sample_space):
        event = create_event(api_client, sample_space.id)
        response = api_client.put(f"/events/{event['id']}", json={"payment_status": "paid"})
        assert response.status_code == 422

    def test_unknown_event_link(self, api_client):
        response = api_client.post("/transactions/", json={
            "type": "income",
            "category": "rental",
            "description": "Miete",
            "amount": "10.00",
            "date": "2026-03-01",
            "event_id": 999,
        })
        assert response.status_code == 404
        assert response.json()["detail"]["error_code"] == "not_found"

    def test_manual_reconcile(self, api_client, sample_space):
        event = create_event(api_client, sample_space.id, deposit="1000.00")
        response = api_client.post(f"/events/{event['id']}/reconcile")
        assert response.json() == {"event_id": event["id"], "payment_status": "paid"}

        assert api_client.post("/events/999/reconcile").status_code == 404

    def test_event_with_timezone_offsets(self, api_client, sample_space):
        """Test: Naiver Beginn und Ende mit Zeitzone werden verglichen statt abzustürzen"""
        event = create_event(api_client, sample_space.id, end="2026-03-16T23:00:00Z")
        assert event["end"].startswith("2026-03-1")

        response = api_client.post("/events/", json={
            "title": "Rückwärts",
            "start": "2026-03-14T18:00:00",
            "end": "2026-03-12T23:00:00+00:00",
            "space_id": sample_space.id,
        })
        assert response.status_code == 422

    def test_update_end_with_timezone(self, api_client, sample_space):
        event = create_event(api_client, sample_space.id)
        response = api_client.put(f"/events/{event['id']}", json={"end": "2026-03-16T23:30:00Z"})
        assert response.status_code == 200, response.text

    def test_failed_reconciliation_keeps_nothing(self, api_client, sample_space, monkeypatch):
        """Test: Datenbankfehler beim Abgleich -> 503, die Zahlung wird nicht gespeichert"""
        event = create_event(api_client, sample_space.id)

        def fail(db, event_id):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(reconciliation, "paid_income_for_event", fail)
        response = api_client.post("/transactions/", json={
            "type": "income",
            "category": "event_payment",
            "description": "Zahlung",
            "amount": "800.00",
            "date": "2026-03-10",
            "event_id": event["id"],
        })
        monkeypatch.undo()

        assert response.status_code == 503
        assert response.json()["detail"]["error_code"] == "db_error"
        assert api_client.get("/transactions/").json() == []
        assert api_client.get(f"/events/{event['id']}").json()["payment_status"] == "partial"


@pytest.mark.integration
class TestFinancialEndpoints:

    def test_summary(self, api_client, sample_space):
        event = create_event(api_client, sample_space.id, deposit="100.00")
        create_payment(api_client, event["id"], "400.00")

        response = api_client.get("/financial/summary", params={"start": "2026-03-01", "end": "2026-03-31"})
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["total_income"]) == Decimal("500")
        assert Decimal(data["event_income"]["deposits_received"]) == Decimal("500")

    def test_summary_rejects_reversed_range(self, api_client):
        response = api_client.get("/financial/summary", params={"start": "2026-03-31", "end": "2026-03-01"})
        assert response.status_code == 422
        assert response.json()["detail"]["error_code"] == "validation"

    def test_period_summary(self, api_client):
        assert api_client.get("/financial/period/year").status_code == 200
        response = api_client.get("/financial/period/decade")
        assert response.status_code == 422

    def test_ledger_filters(self, api_client, sample_space):
        event = create_event(api_client, sample_space.id)
        create_payment(api_client, event["id"], "300.00")
        create_payment(api_client, event["id"], "200.00", status="pending")

        response = api_client.get("/financial/ledger", params={"status": "paid", "type": "income"})
        assert response.status_code == 200
        data = response.json()
        assert len(data["entries"]) == 1
        assert Decimal(data["summary"]["paid_income"]) == Decimal("300")
        assert Decimal(data["summary"]["pending_income"]) == Decimal("0")

    def test_ledger_invalid_filter(self, api_client):
        response = api_client.get("/financial/ledger", params={"type": "transfer"})
        assert response.status_code == 422

    def test_ledger_csv_export(self, api_client, sample_space):
        event = create_event(api_client, sample_space.id)
        create_payment(api_client, event["id"], "300.00")

        response = api_client.get("/financial/ledger/export/csv")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment; filename=Finanzen_" in response.headers["content-disposition"]

    def test_unknown_export_format(self, api_client):
        assert api_client.get("/financial/ledger/export/docx").status_code == 404

    def test_entries_and_forecast(self, api_client, sample_space):
        create_event(api_client, sample_space.id)
        entries = api_client.get("/financial/entries").json()
        assert [e["source"] for e in entries] == ["event"]

        forecast = api_client.get("/financial/forecast", params={"start": "2026-03-01", "end": "2026-03-31"})
        assert forecast.status_code == 200
        assert forecast.json()["pending_count"] == 0


@pytest.mark.integration
class TestCalendarAndContracts:

    def test_calendar(self, api_client, sample_space):
        create_event(api_client, sample_space.id)
        response = api_client.get("/calendar/", params={"start": "2026-03-14", "end": "2026-03-14"})
        assert response.status_code == 200
        assert [e["title"] for e in response.json()] == ["Festsaal - Hochzeit Souza"]

    def test_contract_prefill_and_pdf(self, api_client, sample_space, sample_client):
        event = create_event(api_client, sample_space.id, client_id=sample_client.id)

        form = api_client.get(f"/contracts/events/{event['id']}/form").json()
        assert form["client_name"] == "Ana Souza"

        response = api_client.post(f"/contracts/spaces/{sample_space.id}/pdf", json={"form": form})
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")

    def test_contract_number(self, api_client, sample_space):
        response = api_client.get(f"/contracts/spaces/{sample_space.id}/number", params={"on": "2026-10-19"})
        assert response.json() == {"contract_number": "FES-20261019"}

    def test_clauses(self, api_client):
        clauses = api_client.get("/contracts/clauses").json()
        assert len(clauses) == 12
        assert "client_name" in api_client.get("/contracts/placeholders").json()["placeholders"]
