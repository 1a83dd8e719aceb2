"""Build Excel workbooks for staff reports."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from librarium.domain.entities import OverdueTransaction

EXCEL_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)

OVERDUE_REPORT_HEADERS = (
    "Transacción",
    "Socio",
    "Correo",
    "Libro",
    "ISBN",
    "Ejemplar",
    "Fecha de préstamo",
    "Fecha de vencimiento",
    "Días de retraso",
)

_DATETIME_FORMAT = "%Y-%m-%d %H:%M"


@dataclass
class SpreadsheetFile:
    """Binary workbook ready to be streamed to the client."""

    filename: str
    content: bytes
    content_type: str = EXCEL_CONTENT_TYPE


def _format_datetime(value: datetime | None) -> str | None:
    return value.strftime(_DATETIME_FORMAT) if value else None


def _style_header(worksheet) -> None:
    header_fill = PatternFill(fill_type="solid", fgColor="4F81BD")
    header_font = Font(color="FFFFFFFF", bold=True)
    header_alignment = Alignment(horizontal="center", vertical="center")
    for cell in worksheet[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = header_alignment
    worksheet.freeze_panes = "A2"


def _create_overdue_workbook(records: Sequence[OverdueTransaction]) -> Workbook:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Vencidos"
    worksheet.append(OVERDUE_REPORT_HEADERS)
    _style_header(worksheet)

    for record in records:
        worksheet.append(
            [
                record.transaction.id,
                record.user.name if record.user else None,
                record.user.email if record.user else None,
                record.book.title if record.book else None,
                record.book.isbn if record.book else None,
                record.book_copy.copy_number if record.book_copy else None,
                _format_datetime(record.transaction.checkout_date),
                _format_datetime(record.transaction.due_date),
                record.days_overdue,
            ]
        )

    for index, header in enumerate(OVERDUE_REPORT_HEADERS, start=1):
        letter = worksheet.cell(row=1, column=index).column_letter
        worksheet.column_dimensions[letter].width = max(len(header) + 4, 14)

    return workbook


def build_overdue_report(
    records: Sequence[OverdueTransaction], *, generated_at: datetime
) -> SpreadsheetFile:
    """Return an ``.xlsx`` workbook listing ``records``."""

    workbook = _create_overdue_workbook(records)
    buffer = BytesIO()
    workbook.save(buffer)
    filename = f"prestamos_vencidos_{generated_at:%Y%m%d_%H%M}.xlsx"
    return SpreadsheetFile(filename=filename, content=buffer.getvalue())


__all__ = [
    "EXCEL_CONTENT_TYPE",
    "OVERDUE_REPORT_HEADERS",
    "SpreadsheetFile",
    "build_overdue_report",
]
