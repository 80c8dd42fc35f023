"""Export der Ledger-Ansicht als Excel, CSV und PDF"""
import csv
import logging
from datetime import datetime
from io import BytesIO, StringIO

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from app.config import settings
from app.models.enums import CATEGORY_LABELS, TransactionType, TransactionStatus
from app.services.excel_service import ExcelService
from app.services.ledger import LedgerResult
from app.utils.money import format_currency

logger = logging.getLogger(__name__)

TYPE_LABELS = {TransactionType.INCOME: "Einnahme", TransactionType.EXPENSE: "Ausgabe"}
STATUS_LABELS = {TransactionStatus.PAID: "Bezahlt", TransactionStatus.PENDING: "Offen"}

HEADERS = ["Datum", "Typ", "Kategorie", "Beschreibung", "Betrag", "Status", "Bezahlt am", "Referenz", "Raum"]


def export_filename(extension: str) -> str:
    return f"Finanzen_{datetime.now().strftime('%Y%m%d_%H%M%S')}.{extension}"


def _row(entry) -> list:
    return [
        entry.date.strftime('%d.%m.%Y'),
        TYPE_LABELS[entry.type],
        CATEGORY_LABELS[entry.category],
        entry.description,
        entry.amount,
        STATUS_LABELS[entry.status],
        entry.paid_at.strftime('%d.%m.%Y') if entry.paid_at else "",
        entry.reference,
        entry.space_name or "",
    ]


def ledger_to_excel(result: LedgerResult) -> bytes:
    wb, ws = ExcelService.create_workbook("Finanzen")
    column_widths = {1: 12, 2: 12, 3: 22, 4: 35, 5: 14, 6: 10, 7: 12, 8: 25, 9: 20}
    ExcelService.apply_header_row(ws, HEADERS, column_widths)

    row_num = 2
    for entry in result.entries:
        for col_num, value in enumerate(_row(entry), 1):
            if col_num == 5:
                ExcelService.format_currency_cell(
                    ws, row_num, col_num, value, negative=entry.type == TransactionType.EXPENSE
                )
            else:
                ws.cell(row=row_num, column=col_num, value=value)
        row_num += 1

    summary = result.summary
    row_num += 1
    ExcelService.apply_summary_row(ws, row_num, {5: summary.paid_income}, label_text="Einnahmen (bezahlt)")
    ExcelService.apply_summary_row(ws, row_num + 1, {5: summary.paid_expense}, label_text="Ausgaben (bezahlt)")
    ExcelService.apply_summary_row(ws, row_num + 2, {5: summary.pending_income}, label_text="Einnahmen (offen)")
    ExcelService.apply_summary_row(ws, row_num + 3, {5: summary.pending_expense}, label_text="Ausgaben (offen)")

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    logger.info(f"Excel export completed: {len(result.entries)} entries")
    return output.getvalue()


def ledger_to_csv(result: LedgerResult) -> bytes:
    output = StringIO()
    writer = csv.writer(output, delimiter=';', quoting=csv.QUOTE_MINIMAL)
    writer.writerow(HEADERS)
    for entry in result.entries:
        row = _row(entry)
        row[4] = f"{entry.amount:.2f}"
        writer.writerow(row)

    logger.info(f"CSV export completed: {len(result.entries)} entries")
    return output.getvalue().encode('utf-8-sig')  # BOM für Excel


def ledger_to_pdf(result: LedgerResult) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=landscape(A4), topMargin=1.5*cm, bottomMargin=1.5*cm)
    styles = getSampleStyleSheet()
    symbol = settings.currency_symbol
    story = [
        Paragraph("Finanzübersicht", styles['Heading1']),
        Paragraph(f"Erstellt am {datetime.now().strftime('%d.%m.%Y %H:%M')}", styles['Normal']),
        Spacer(1, 0.5*cm),
    ]

    table_data = [HEADERS]
    for entry in result.entries:
        row = _row(entry)
        row[3] = row[3] if len(row[3]) <= 40 else row[3][:37] + "..."
        row[4] = format_currency(entry.amount, symbol)
        table_data.append(row)

    table = Table(table_data, repeatRows=1)
    table_style = [
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#1e40af')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('ALIGN', (4, 1), (4, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#F8F9FA')]),
    ]
    for idx, entry in enumerate(result.entries, start=1):
        color = '#00B050' if entry.type == TransactionType.INCOME else '#C00000'
        table_style.append(('TEXTCOLOR', (4, idx), (4, idx), colors.HexColor(color)))
    table.setStyle(TableStyle(table_style))
    story.append(table)
    story.append(Spacer(1, 0.5*cm))

    summary = result.summary
    sum_table = Table([
        ["Einnahmen (bezahlt):", format_currency(summary.paid_income, symbol)],
        ["Ausgaben (bezahlt):", format_currency(summary.paid_expense, symbol)],
        ["Einnahmen (offen):", format_currency(summary.pending_income, symbol)],
        ["Ausgaben (offen):", format_currency(summary.pending_expense, symbol)],
        ["davon Servicekosten:", format_currency(summary.service_pending_total, symbol)],
    ])
    sum_table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
    ]))
    story.append(sum_table)

    doc.build(story)
    buffer.seek(0)
    logger.info(f"PDF export completed: {len(result.entries)} entries")
    return buffer.getvalue()
