"""Tests für Vertragsvorlagen und Vertrags-PDF"""
import pytest
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from app.schemas import ContractClause, ContractForm, ContractRequest
from app.services.contract_generator import contract_form_for_event, render_contract
from app.services.contract_templates import (
    DEFAULT_CLAUSES,
    format_date,
    generate_contract_number,
    get_initial_clauses,
    substitute_clause,
)


def space_stub(name="Festsaal", prefix=None):
    return SimpleNamespace(
        name=name,
        contract_prefix=prefix,
        address="Rua das Flores 10",
        city="Campinas",
        state="SP",
        owner_name="Maria",
        owner_document="123",
        owner_role="Eigentümerin",
    )


@pytest.mark.unit
class TestContractTemplates:
    """Tests für Platzhalter-Ersetzung und Formatierung"""

    def test_initial_clauses_are_fresh_copies(self):
        clauses = get_initial_clauses()
        assert len(clauses) == len(DEFAULT_CLAUSES) == 12
        assert not any(c.edited for c in clauses)

        clauses[0].content = "geändert"
        assert get_initial_clauses()[0].content != "geändert"

    def test_contract_number_with_prefix(self):
        assert generate_contract_number(space_stub(prefix="EST"), date(2026, 10, 19)) == "EST-20261019"

    def test_contract_number_from_name(self):
        """Test: Ohne Präfix die ersten drei Buchstaben des Namens"""
        assert generate_contract_number(space_stub(name="Sítio Verde"), date(2026, 1, 2)) == "SÍT-20260102"

    def test_format_date(self):
        assert format_date(date(2026, 3, 4)) == "04/03/2026"
        assert format_date(None) == ""

    def test_substitute_values(self):
        form = ContractForm(client_name="Ana Souza", total_value=Decimal("1234.5"))
        text = substitute_clause("{client_name} zahlt {total_value}.", form, space_stub())
        assert text == "Ana Souza zahlt R$ 1.234,50."

    def test_missing_values_become_placeholders(self):
        text = substitute_clause("CPF {client_document}, am {event_date}", ContractForm(), space_stub())
        assert text == "CPF [CPF], am [DATUM DER VERANSTALTUNG]"

    def test_unknown_tokens_are_kept(self):
        text = substitute_clause("Hallo {unbekannt}", ContractForm(), space_stub())
        assert text == "Hallo {unbekannt}"

    def test_space_values(self):
        text = substitute_clause("{space_name} in {city}/{state}", ContractForm(), space_stub())
        assert text == "Festsaal in Campinas/SP"

    def test_empty_strings_in_form(self):
        form = ContractForm(event_date="", guest_count="", total_value="")
        assert form.event_date is None
        assert form.guest_count is None
        assert form.total_value is None


@pytest.mark.integration
class TestContractGenerator:

    def test_prefill_from_event(self, db_session, make_event, sample_client):
        event = make_event(total_value="1000.00", deposit="1200.00", client=sample_client)
        form = contract_form_for_event(db_session, event.id).data

        assert form.client_name == "Ana Souza"
        assert form.client_document == "987.654.321-00"
        assert form.event_date == date(2026, 3, 14)
        assert form.event_start_time == "18:00"
        assert form.deposit_value == Decimal("1000")
        assert form.remaining_value == Decimal("0")
        assert form.contract_number.startswith("FES-")

    def test_prefill_missing_event(self, db_session):
        assert contract_form_for_event(db_session, 5).error_code == "not_found"

    def test_render_pdf(self, db_session, sample_space):
        request = ContractRequest(form=ContractForm(client_name="Ana <Souza> & Co"))
        result = render_contract(db_session, sample_space.id, request)
        assert result.success
        assert result.data.startswith(b"%PDF")

    def test_render_with_edited_clauses(self, db_session, sample_space):
        clauses = [ContractClause(id="x", number="ERSTENS", title="TEST", content="Nur {client_name}", edited=True)]
        result = render_contract(db_session, sample_space.id, ContractRequest(clauses=clauses))
        assert result.data.startswith(b"%PDF")

    def test_render_unknown_space(self, db_session):
        assert render_contract(db_session, 77, ContractRequest()).error_code == "not_found"
