"""Spreadsheet exports of grid data.

Exports are single-sheet workbooks: an optional merged title row, a
"Generated" stamp, then a banded Excel table.  Cells can carry a solid
highlight so the sheet shows the same status colouring as the job grid.
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from io import BytesIO
from typing import Collection, Iterable, Mapping, Sequence

from django.http import HttpResponse
from django.utils import timezone

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
DEFAULT_COLUMN_WIDTH = 18


def sanitize_value(raw: object) -> object:
    """
    Turn a Python value into something openpyxl writes cleanly.

    - Numbers stay numeric; whole Decimals and floats become ints.
    - Dates become DD/MM/YYYY text, datetimes add the local time.
    - Text loses control characters Excel refuses to store.
    """
    if raw is None:
        return ""
    if isinstance(raw, bool):
        return "Yes" if raw else "No"
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else raw
    if isinstance(raw, Decimal):
        return int(raw) if raw == raw.to_integral_value() else float(raw)
    if isinstance(raw, datetime.datetime):
        if timezone.is_aware(raw):
            raw = timezone.localtime(raw)
        return raw.strftime("%d/%m/%Y %H:%M")
    if isinstance(raw, datetime.date):
        return raw.strftime("%d/%m/%Y")
    return ILLEGAL_CHARACTERS_RE.sub("", str(raw))


def argb(color: str) -> str:
    """``#1976d2`` -> ``FF1976D2``; anything unreadable becomes white."""
    hex_part = (color or "").lstrip("#").upper()
    if len(hex_part) == 3:
        hex_part = "".join(ch * 2 for ch in hex_part)
    return f"FF{hex_part}" if len(hex_part) == 6 else "FFFFFFFF"


def base_styles() -> dict:
    side = Side(style="thin", color="FFE5E7EB")
    centred = Alignment(horizontal="center", vertical="center", wrap_text=True)
    return {
        "title_font": Font(name="Calibri", bold=True, size=14),
        "header_font": Font(name="Calibri", bold=True, size=11),
        "cell_font": Font(name="Calibri", size=11),
        "highlight_font": Font(name="Calibri", size=11, color="FFFFFFFF"),
        "header_fill": PatternFill("solid", fgColor="FFF9FAFB"),
        "centred": centred,
        "left": Alignment(horizontal="left", vertical="center", wrap_text=True),
        "border": Border(left=side, right=side, top=side, bottom=side),
    }


def unique_table_name(base: str, taken: Collection[str]) -> str:
    """Excel table names must be unique identifiers that don't start with a digit."""
    name = "".join(ch if ch.isalnum() else "_" for ch in base) or "Table"
    if name[0].isdigit():
        name = f"T{name}"
    candidate, suffix = name, 1
    while candidate in taken:
        candidate = f"{name}_{suffix}"
        suffix += 1
    return candidate


def write_table(
    ws,
    headers: Sequence[str],
    rows: Iterable[Sequence[object]],
    *,
    start_row: int = 1,
    column_widths: Sequence[int] | None = None,
    table_name: str | None = None,
    text_columns: Collection[int] = (),
    fills: Sequence[Mapping[int, str]] | None = None,
) -> tuple[int, int]:
    """Write ``headers`` and ``rows`` as a banded table starting at ``start_row``.

    ``text_columns`` are zero-based indexes of free-text columns, which are
    left aligned; everything else is centred.  ``fills`` holds, per data
    row, a ``{column index: hex colour}`` mapping of highlighted cells,
    which get a solid fill and white text.

    Returns the header row and the last data row.
    """
    styles = base_styles()
    fills = fills or []

    for col, label in enumerate(headers, start=1):
        cell = ws.cell(row=start_row, column=col, value=label)
        cell.font = styles["header_font"]
        cell.fill = styles["header_fill"]
        cell.alignment = styles["centred"]
        cell.border = styles["border"]

    last_row = start_row
    for offset, values in enumerate(rows):
        last_row = start_row + 1 + offset
        highlights = fills[offset] if offset < len(fills) else {}
        for index, value in enumerate(values):
            cell = ws.cell(row=last_row, column=index + 1, value=sanitize_value(value))
            cell.border = styles["border"]
            cell.alignment = styles["left"] if index in text_columns else styles["centred"]
            color = highlights.get(index)
            if color:
                cell.fill = PatternFill("solid", fgColor=argb(color))
                cell.font = styles["highlight_font"]
            else:
                cell.font = styles["cell_font"]

    widths = list(column_widths or [])
    for index in range(len(headers)):
        width = widths[index] if index < len(widths) else DEFAULT_COLUMN_WIDTH
        ws.column_dimensions[get_column_letter(index + 1)].width = width

    # An Excel table needs at least one data row.
    if last_row > start_row:
        table = Table(
            displayName=unique_table_name(table_name or "Table", ws.tables.keys()),
            ref=f"A{start_row}:{get_column_letter(len(headers))}{last_row}",
        )
        table.tableStyleInfo = TableStyleInfo(name="TableStyleMedium9", showRowStripes=True)
        ws.add_table(table)

    return start_row, last_row


def _banner(ws, row: int, width: int, text: str, font, alignment) -> None:
    ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=max(width, 1))
    cell = ws.cell(row=row, column=1, value=text)
    cell.font = font
    cell.alignment = alignment


def build_workbook(
    *,
    sheet_title: str,
    headers: Sequence[str],
    rows: Iterable[Sequence[object]],
    report_title: str | None = None,
    include_timestamp: bool = True,
    **table_kwargs,
) -> Workbook:
    """Single-sheet workbook; ``table_kwargs`` go to ``write_table``."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title or "Report"
    styles = base_styles()

    row = 1
    if report_title:
        _banner(ws, row, len(headers), report_title, styles["title_font"], styles["centred"])
        row += 1
    if include_timestamp:
        stamp = timezone.localtime(timezone.now()).strftime("%d/%m/%Y %H:%M")
        _banner(ws, row, len(headers), f"Generated: {stamp}", styles["cell_font"], styles["left"])
        row += 1

    write_table(ws, headers, rows, start_row=row, **table_kwargs)
    return wb


def build_table_response(*, filename: str, **workbook_kwargs) -> HttpResponse:
    """Render ``build_workbook(**workbook_kwargs)`` as an attachment download."""
    buffer = BytesIO()
    build_workbook(**workbook_kwargs).save(buffer)
    resp = HttpResponse(buffer.getvalue(), content_type=XLSX_CONTENT_TYPE)
    resp["Content-Disposition"] = f"attachment; filename={filename}"
    return resp
