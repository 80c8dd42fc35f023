"""Service für Excel-Exporte mit wiederverwendbaren Formatierungen"""
from decimal import Decimal
from typing import Dict, List, Optional, Any, Tuple
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.worksheet.worksheet import Worksheet


class ExcelService:
    """
    Wiederverwendbare Excel-Export-Funktionen für konsistente Formatierung
    (Header, Summenzeilen, Währungszellen).
    """

    HEADER_COLOR = "4472C4"   # Blau
    SUMMARY_COLOR = "D9E1F2"  # Hellblau
    GREEN_COLOR = "00B050"
    RED_COLOR = "C00000"
    WHITE_COLOR = "FFFFFF"

    CURRENCY_FORMAT = '#,##0.00'

    @staticmethod
    def create_workbook(sheet_title: str = "Sheet1") -> Tuple[Workbook, Worksheet]:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_title
        return wb, ws

    @staticmethod
    def apply_header_row(
        ws: Worksheet,
        headers: List[str],
        column_widths: Optional[Dict[int, int]] = None,
        row: int = 1
    ) -> None:
        """
        Schreibt eine formatierte Header-Zeile.

        Args:
            ws: Worksheet-Objekt
            headers: Liste der Header-Texte
            column_widths: Optional - Dictionary mit {Spalten-Index: Breite}
            row: Zeilennummer (default: 1)
        """
        fill = PatternFill(
            start_color=ExcelService.HEADER_COLOR,
            end_color=ExcelService.HEADER_COLOR,
            fill_type="solid"
        )
        font = Font(color=ExcelService.WHITE_COLOR, bold=True, size=11)
        alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)

        for col_num, header_text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col_num, value=header_text)
            cell.fill = fill
            cell.font = font
            cell.alignment = alignment

        if column_widths:
            for col_num, width in column_widths.items():
                column_letter = ws.cell(row=row, column=col_num).column_letter
                ws.column_dimensions[column_letter].width = width

    @staticmethod
    def apply_summary_row(
        ws: Worksheet,
        row: int,
        values: Dict[int, Any],
        label_column: int = 1,
        label_text: str = "GESAMT"
    ) -> None:
        """Summenzeile mit Label; Decimal-Werte werden als Währung formatiert"""
        fill = PatternFill(
            start_color=ExcelService.SUMMARY_COLOR,
            end_color=ExcelService.SUMMARY_COLOR,
            fill_type="solid"
        )
        font = Font(bold=True)

        label_cell = ws.cell(row=row, column=label_column, value=label_text)
        label_cell.fill = fill
        label_cell.font = font

        for col_num, value in values.items():
            cell = ws.cell(row=row, column=col_num, value=value)
            cell.fill = fill
            cell.font = font
            if isinstance(value, Decimal):
                cell.number_format = ExcelService.CURRENCY_FORMAT

    @staticmethod
    def format_currency_cell(
        ws: Worksheet,
        row: int,
        column: int,
        value: Decimal,
        negative: bool = False
    ) -> None:
        """
        Schreibt einen Betrag als Währungszelle.

        Args:
            negative: Rot statt Grün einfärben (z.B. Ausgaben)
        """
        cell = ws.cell(row=row, column=column, value=value)
        cell.number_format = ExcelService.CURRENCY_FORMAT
        cell.font = Font(color=ExcelService.RED_COLOR if negative else ExcelService.GREEN_COLOR)
