"""
Vorlagen für Mietverträge: Standardklauseln und Platzhalter-Ersetzung.

Klauseltexte enthalten Tokens wie {client_name}; fehlende Werte werden
durch gut sichtbare Platzhalter ersetzt, damit unvollständige Verträge
beim Durchlesen auffallen.
"""
import re
from datetime import date
from typing import Dict, List, Optional

from app.config import settings
from app.schemas.contract import ContractClause, ContractForm
from app.utils.money import format_currency

TOKEN_PATTERN = re.compile(r"\{(\w+)\}")

PLACEHOLDERS = {
    "contract_number": "[VERTRAGSNUMMER]",
    "contract_date": "[VERTRAGSDATUM]",
    "client_name": "[NAME DES MIETERS]",
    "client_document": "[CPF]",
    "client_rg": "[RG]",
    "client_address": "[ADRESSE]",
    "client_city": "[STADT]",
    "client_state": "[BUNDESSTAAT]",
    "client_phone": "[TELEFON]",
    "client_email": "[E-MAIL]",
    "event_date": "[DATUM DER VERANSTALTUNG]",
    "event_start_time": "[BEGINN]",
    "event_end_time": "[ENDE]",
    "event_type": "[ART DER VERANSTALTUNG]",
    "guest_count": "[ANZAHL GÄSTE]",
    "total_value": "[GESAMTBETRAG]",
    "deposit_value": "[ANZAHLUNG]",
    "deposit_due_date": "[FÄLLIGKEIT ANZAHLUNG]",
    "remaining_value": "[RESTBETRAG]",
    "remaining_due_date": "[FÄLLIGKEIT RESTBETRAG]",
    "payment_method": "[ZAHLUNGSART]",
}

PAYMENT_METHODS = [
    "PIX",
    "Bargeld",
    "Überweisung",
    "Kreditkarte",
    "Debitkarte",
    "Boleto",
]

DEFAULT_CLAUSES: List[Dict[str, str]] = [
    {
        "id": "objekt",
        "number": "ERSTENS",
        "title": "GEGENSTAND DES VERTRAGS",
        "content": (
            "Gegenstand dieses Vertrags ist die Vermietung des Raums {space_name}, gelegen in "
            "{space_address}, für die in diesem Vertrag beschriebene Veranstaltung zu den hier "
            "festgelegten Daten, Uhrzeiten und Bedingungen."
        ),
    },
    {
        "id": "zeitraum",
        "number": "ZWEITENS",
        "title": "NUTZUNGSZEITRAUM",
        "content": (
            "Der MIETER darf den Raum am {event_date} von {event_start_time} bis {event_end_time} Uhr "
            "nutzen. Das Ende der Nutzungszeit ist strikt einzuhalten; eine Verlängerung bedarf einer "
            "vorherigen schriftlichen Vereinbarung und einer zusätzlichen Gebühr."
        ),
    },
    {
        "id": "wert",
        "number": "DRITTENS",
        "title": "VEREINBARTER BETRAG",
        "content": (
            "Der Gesamtbetrag für die Vermietung beträgt {total_value} gemäß den in diesem Vertrag "
            "festgelegten Zahlungsbedingungen."
        ),
    },
    {
        "id": "zahlung",
        "number": "VIERTENS",
        "title": "ZAHLUNGSBEDINGUNGEN",
        "content": (
            "Die Zahlung erfolgt wie folgt:\n\n"
            "a) Anzahlung: {deposit_value}, fällig am {deposit_due_date};\n"
            "b) Restbetrag: {remaining_value}, fällig am {remaining_due_date};\n"
            "c) Zahlungsart: {payment_method}.\n\n"
            "Bei Zahlungsverzug wird eine Vertragsstrafe von 2 % auf den offenen Betrag zuzüglich "
            "1 % Zinsen pro Monat fällig."
        ),
    },
    {
        "id": "reservierung",
        "number": "FÜNFTENS",
        "title": "ANZAHLUNG UND RESERVIERUNG",
        "content": (
            "Die Reservierung des Termins wird erst mit Eingang der Anzahlung wirksam. Die Anzahlung "
            "wird bei Rücktritt durch den MIETER nach Maßgabe der achten Klausel nicht erstattet."
        ),
    },
    {
        "id": "pflichten_mieter",
        "number": "SECHSTENS",
        "title": "PFLICHTEN DES MIETERS",
        "content": (
            "Der MIETER verpflichtet sich:\n\n"
            "a) die Zahlungen fristgerecht zu leisten;\n"
            "b) den Raum und alle Einrichtungen pfleglich zu behandeln und für Schäden durch sich, "
            "seine Gäste oder Dienstleister aufzukommen;\n"
            "c) die zulässige Höchstzahl an Gästen einzuhalten;\n"
            "d) keine baulichen Veränderungen ohne schriftliche Zustimmung vorzunehmen;\n"
            "e) nach der Veranstaltung alle eigenen Gegenstände und Dekorationen zu entfernen."
        ),
    },
    {
        "id": "pflichten_vermieter",
        "number": "SIEBTENS",
        "title": "PFLICHTEN DES VERMIETERS",
        "content": (
            "Der VERMIETER verpflichtet sich:\n\n"
            "a) den Raum sauber und in einwandfreiem Zustand zu übergeben;\n"
            "b) die Funktion aller mitvermieteten Einrichtungen sicherzustellen;\n"
            "c) die personenbezogenen Daten des MIETERS vertraulich zu behandeln;\n"
            "d) den MIETER rechtzeitig über Umstände zu informieren, die die Veranstaltung gefährden."
        ),
    },
    {
        "id": "ruecktritt",
        "number": "ACHTENS",
        "title": "RÜCKTRITT UND KÜNDIGUNG",
        "content": (
            "Bei Rücktritt durch den MIETER gilt:\n\n"
            "a) mehr als 60 Tage vor der Veranstaltung: Erstattung von 50 % der Anzahlung;\n"
            "b) zwischen 30 und 60 Tagen vorher: Einbehalt von 75 % der Anzahlung;\n"
            "c) weniger als 30 Tage vorher: Einbehalt der gesamten Anzahlung.\n\n"
            "Tritt der VERMIETER ohne wichtigen Grund zurück, erstattet er alle gezahlten Beträge "
            "zuzüglich einer Vertragsstrafe von 20 % des Gesamtbetrags."
        ),
    },
    {
        "id": "kapazitaet",
        "number": "NEUNTENS",
        "title": "KAPAZITÄT UND SICHERHEIT",
        "content": (
            "Der MIETER kennt die zulässige Höchstzahl an Gästen ({guest_count} erwartet) und "
            "verpflichtet sich, diese einzuhalten. Die Beauftragung von Sicherheitspersonal liegt "
            "in der Verantwortung des MIETERS."
        ),
    },
    {
        "id": "vertragsstrafe",
        "number": "ZEHNTENS",
        "title": "VERTRAGSSTRAFEN",
        "content": (
            "Bei Verstoß gegen eine Klausel dieses Vertrags zahlt die verletzende Partei eine "
            "Vertragsstrafe von 10 % des Gesamtbetrags, unbeschadet weiterer Schadensersatzansprüche."
        ),
    },
    {
        "id": "schlussbestimmungen",
        "number": "ELFTENS",
        "title": "SCHLUSSBESTIMMUNGEN",
        "content": (
            "Dieser Vertrag gibt die Vereinbarung der Parteien vollständig wieder. Änderungen "
            "bedürfen der Schriftform und der Unterschrift beider Parteien."
        ),
    },
    {
        "id": "gerichtsstand",
        "number": "ZWÖLFTENS",
        "title": "GERICHTSSTAND",
        "content": (
            "Gerichtsstand ist {city}/{state}.\n\n"
            "Zum Zeichen ihres Einverständnisses unterschreiben die Parteien diesen Vertrag in "
            "zwei gleichlautenden Ausfertigungen."
        ),
    },
]


def get_initial_clauses() -> List[ContractClause]:
    """Frische Kopie der Standardklauseln (unbearbeitet)"""
    return [ContractClause(**clause, edited=False) for clause in DEFAULT_CLAUSES]


def format_date(value: Optional[date]) -> str:
    """TT/MM/JJJJ, leer für None"""
    return value.strftime("%d/%m/%Y") if value else ""


def generate_contract_number(space, on: Optional[date] = None) -> str:
    """
    Vertragsnummer PREFIX-JJJJMMTT.

    Ohne hinterlegtes Präfix werden die ersten drei Buchstaben des
    Raumnamens verwendet.
    """
    on = on or date.today()
    prefix = space.contract_prefix or "".join(ch for ch in space.name if ch.isalpha())[:3].upper()
    return f"{prefix}-{on.strftime('%Y%m%d')}"


def build_token_values(form: ContractForm, space) -> Dict[str, str]:
    """Token -> Text für Raum- und Formulardaten (leere Werte bleiben leer)"""
    symbol = settings.currency_symbol

    def currency(value) -> str:
        return format_currency(value, symbol) if value is not None else ""

    return {
        "space_name": space.name or "",
        "space_address": space.address or "",
        "city": space.city or "",
        "state": space.state or "",
        "owner_name": space.owner_name or "",
        "owner_document": space.owner_document or "",
        "owner_role": space.owner_role or "",
        "contract_number": form.contract_number or "",
        "contract_date": format_date(form.contract_date),
        "client_name": form.client_name or "",
        "client_document": form.client_document or "",
        "client_rg": form.client_rg or "",
        "client_address": form.client_address or "",
        "client_city": form.client_city or "",
        "client_state": form.client_state or "",
        "client_phone": form.client_phone or "",
        "client_email": form.client_email or "",
        "event_date": format_date(form.event_date),
        "event_start_time": form.event_start_time or "",
        "event_end_time": form.event_end_time or "",
        "event_type": form.event_type or "",
        "guest_count": str(form.guest_count) if form.guest_count is not None else "",
        "total_value": currency(form.total_value),
        "deposit_value": currency(form.deposit_value),
        "deposit_due_date": format_date(form.deposit_due_date),
        "remaining_value": currency(form.remaining_value),
        "remaining_due_date": format_date(form.remaining_due_date),
        "payment_method": form.payment_method or "",
    }


def substitute_clause(content: str, form: ContractForm, space) -> str:
    """
    Ersetzt alle {token} im Klauseltext.

    Leere Formularwerte werden zu Platzhaltern wie '[CPF]'; unbekannte
    Tokens bleiben unverändert stehen.
    """
    values = build_token_values(form, space)

    def replace(match: "re.Match[str]") -> str:
        token = match.group(1)
        if token not in values:
            return match.group(0)
        return values[token] or PLACEHOLDERS.get(token, "")

    return TOKEN_PATTERN.sub(replace, content)
