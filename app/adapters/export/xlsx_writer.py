"""Spreadsheet export of statistics rows (openpyxl)."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from io import BytesIO

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from app.domain.entities.statistics import ExportRow

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
SHEET_TITLE = "События"
DATE_FORMAT = "DD.MM.YYYY"

# (header, column width)
COLUMNS = (
    ("Дата события", 12),
    ("Тип", 10),
    ("Текст жалобы", 50),
    ("Маршрут", 10),
    ("Колонна", 8),
    ("Категория", 30),
    ("Номер задачи в Битрикс", 15),
)


def export_filename(today: date | None = None) -> str:
    today = today or date.today()
    return f"complaints_export_{today.isoformat()}.xlsx"


def _cells(row: ExportRow) -> list:
    return [
        row.event_date,
        row.type.value,
        row.complaint_text,
        row.route_num,
        row.column_no,
        row.category,
        row.bitrix_num or "",
    ]


def write_xlsx(rows: Iterable[ExportRow]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    ws.append([header for header, _ in COLUMNS])
    for row in rows:
        ws.append(_cells(row))
        ws.cell(row=ws.max_row, column=1).number_format = DATE_FORMAT

    for index, (_, width) in enumerate(COLUMNS, start=1):
        ws.column_dimensions[get_column_letter(index)].width = width

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
