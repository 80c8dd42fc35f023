"""Mietvertrag (PDF) Generator Service"""
import logging
from io import BytesIO
from datetime import date
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer, KeepTogether
from sqlalchemy.orm import Session, joinedload

from app.models import Event, Space
from app.schemas.contract import ContractClause, ContractForm, ContractRequest
from app.services.contract_templates import (
    get_initial_clauses,
    generate_contract_number,
    substitute_clause,
    format_date,
)
from app.utils.error_decorators import service_operation
from app.utils.error_handler import NotFoundError
from app.utils.money import to_decimal, clamp_deposit

logger = logging.getLogger(__name__)


def _paragraph_text(text: str) -> str:
    """Klauseltext für reportlab-Paragraphs (Markup escapen, Zeilenumbrüche)"""
    return escape(text).replace("\n", "<br/>")


class ContractGenerator:
    """Service für die Generierung von Mietverträgen als PDF"""

    PRIMARY_COLOR = colors.HexColor('#1e40af')

    def __init__(self, db: Session):
        self.pagesize = A4
        self.width, self.height = self.pagesize
        self.db = db

    def get_space(self, space_id: int) -> Space:
        space = self.db.get(Space, space_id)
        if space is None:
            raise NotFoundError("Raum", space_id)
        return space

    def prefill_from_event(self, event_id: int) -> ContractForm:
        """
        Formulardaten aus einer Buchung vorbelegen (Mieter, Termin, Beträge).

        Der Restbetrag ergibt sich aus Gesamtwert minus (gekappter) Anzahlung.
        """
        event = self.db.query(Event).options(
            joinedload(Event.client), joinedload(Event.space)
        ).filter(Event.id == event_id).first()
        if event is None:
            raise NotFoundError("Buchung", event_id)

        total_value = to_decimal(event.total_value)
        deposit = clamp_deposit(event.deposit, total_value)
        client = event.client

        return ContractForm(
            contract_number=generate_contract_number(event.space),
            contract_date=date.today(),
            client_name=client.name if client else None,
            client_document=client.document if client else None,
            client_address=client.address if client else None,
            client_phone=client.phone if client else None,
            client_email=client.email if client else None,
            event_date=event.start.date(),
            event_start_time=event.start.strftime("%H:%M"),
            event_end_time=event.end.strftime("%H:%M"),
            event_type=event.title,
            total_value=total_value,
            deposit_value=deposit,
            remaining_value=total_value - deposit,
            observations=event.notes,
        )

    def generate_contract_pdf(
        self,
        space: Space,
        form: ContractForm,
        clauses: Optional[List[ContractClause]] = None,
    ) -> bytes:
        """
        Generiert den Mietvertrag

        Args:
            space: Vermieteter Raum (Vermieterdaten, Adresse, Präfix)
            form: Formulardaten; fehlende Werte erscheinen als Platzhalter
            clauses: Bearbeitete Klauseln (default: Standardklauseln)

        Returns:
            PDF als bytes
        """
        clauses = clauses if clauses is not None else get_initial_clauses()
        if not form.contract_number:
            form = form.model_copy(update={"contract_number": generate_contract_number(space)})

        buffer = BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=self.pagesize, topMargin=2*cm, bottomMargin=2*cm)
        story = []

        # Styles
        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(
            'ContractTitle',
            parent=styles['Heading1'],
            fontSize=16,
            alignment=TA_CENTER,
            textColor=self.PRIMARY_COLOR,
            spaceAfter=12,
        )
        clause_heading = ParagraphStyle(
            'ClauseHeading',
            parent=styles['Heading3'],
            fontSize=11,
            spaceBefore=8,
            spaceAfter=4,
        )
        body_style = ParagraphStyle(
            'ContractBody',
            parent=styles['Normal'],
            fontSize=10,
            leading=14,
            alignment=TA_JUSTIFY,
        )

        story.append(Paragraph("MIETVERTRAG FÜR VERANSTALTUNGSRÄUME", title_style))
        story.append(Paragraph(escape(space.name), ParagraphStyle('SpaceName', parent=body_style, alignment=TA_CENTER)))
        story.append(Spacer(1, 0.5*cm))

        # Vertragsnummer und Datum
        info_table = Table([
            ["Vertragsnummer:", form.contract_number],
            ["Vertragsdatum:", format_date(form.contract_date) or "-"],
        ], colWidths=[5*cm, 8*cm])
        info_table.setStyle(TableStyle([
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
        ]))
        story.append(info_table)
        story.append(Spacer(1, 0.5*cm))

        # Vertragsparteien
        landlord = (
            "{owner_name}, {owner_role}, Dokument {owner_document}, vertretend den Raum "
            "{space_name}, {space_address}, {city}/{state}."
        )
        tenant = (
            "{client_name}, CPF {client_document}, RG {client_rg}, wohnhaft in {client_address}, "
            "{client_city}/{client_state}, Telefon {client_phone}, E-Mail {client_email}."
        )
        for label, template in (("VERMIETER", landlord), ("MIETER", tenant)):
            text = _paragraph_text(substitute_clause(template, form, space))
            story.append(Paragraph(f"<b>{label}:</b> {text}", body_style))
            story.append(Spacer(1, 0.2*cm))

        # Klauseln
        for clause in clauses:
            content = substitute_clause(clause.content, form, space)
            story.append(KeepTogether([
                Paragraph(escape(f"KLAUSEL {clause.number}: {clause.title}"), clause_heading),
                Paragraph(_paragraph_text(content), body_style),
            ]))

        if form.observations:
            story.append(Paragraph("BEMERKUNGEN", clause_heading))
            story.append(Paragraph(_paragraph_text(form.observations), body_style))

        # Unterschriften
        story.append(Spacer(1, 1.5*cm))
        signature_table = Table([
            ["_" * 35, "_" * 35],
            [space.owner_name or "VERMIETER", form.client_name or "MIETER"],
        ], colWidths=[8.5*cm, 8.5*cm])
        signature_table.setStyle(TableStyle([
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('TOPPADDING', (0, 1), (-1, 1), 4),
        ]))
        story.append(signature_table)

        doc.build(story)
        buffer.seek(0)
        logger.info(f"Contract {form.contract_number} generated for space {space.id}")
        return buffer.getvalue()


@service_operation("Prefilling contract form")
def contract_form_for_event(db: Session, event_id: int) -> ContractForm:
    return ContractGenerator(db).prefill_from_event(event_id)


@service_operation("Generating contract PDF")
def render_contract(db: Session, space_id: int, request: ContractRequest) -> bytes:
    generator = ContractGenerator(db)
    space = generator.get_space(space_id)
    return generator.generate_contract_pdf(space, request.form, request.clauses)
