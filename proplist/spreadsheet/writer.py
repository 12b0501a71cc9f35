"""Spreadsheet writer for exports and the import template."""

from datetime import date
from io import BytesIO
from typing import Any, Iterable, Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from proplist.mapping import COLUMNS, ColumnSpec
from proplist.models import Property
from proplist.serialization import to_document

EXPORT_SHEET_NAME = "Properties"
TEMPLATE_SHEET_NAME = "Properties Template"
TEMPLATE_FILENAME = "properties_template.xlsx"

# Sample rows keyed by display header; Date is filled in at build time
TEMPLATE_ROWS: tuple[dict[str, str], ...] = (
    {
        "Property Type": "Kothi",
        "Kothi Number": "123",
        "Sector/Phase": "Sector 1",
        "Plot Size": "200 sq yards",
        "Marla": "5",
        "PLC": "10%",
        "Road": "30 feet",
        "CP Name": "John Doe",
        "Contact Number": "9876543210",
        "CP Firm Name": "ABC Realty",
        "Demand": "50 Lakh",
        "Expectations": "Ready to move",
        "Facing": "North",
    },
    {
        "Property Type": "Flat",
        "Project": "Green Valley Apartments",
        "Floor": "3",
        "BHK": "3BHK",
        "Sector/Phase": "Sector 2",
        "Plot Size": "1200 sq ft",
        "Marla": "3",
        "PLC": "5%",
        "Road": "24 feet",
        "CP Name": "Jane Smith",
        "Contact Number": "9876543211",
        "CP Firm Name": "XYZ Properties",
        "Demand": "35 Lakh",
        "Expectations": "Immediate possession",
        "Facing": "East",
    },
)


def export_filename(today: date | None = None) -> str:
    """``properties_export_<ISO date>.xlsx``."""
    today = today or date.today()
    return f"properties_export_{today.isoformat()}.xlsx"


def cell_value(value: str | None) -> str | None:
    """Text safe to store in a cell; empty text becomes an empty cell.

    Control characters that worksheets cannot hold are removed.
    """
    if not value:
        return None
    return ILLEGAL_CHARACTERS_RE.sub("", value) or None


def property_row(prop: Property, columns: Sequence[ColumnSpec] = COLUMNS) -> list[str | None]:
    """Cell values for one property; absent fields become empty cells."""
    document = to_document(prop)
    return [cell_value(document.get(column.key)) for column in columns]


def _write_sheet(
    title: str,
    rows: Iterable[Sequence[Any]],
    columns: Sequence[ColumnSpec],
) -> bytes:
    workbook = Workbook()
    worksheet: Worksheet = workbook.active
    worksheet.title = title
    worksheet.append([column.header for column in columns])
    for row in rows:
        worksheet.append(list(row))
        # Free text such as "=50 Lakh" is data, never a formula
        for cell in worksheet[worksheet.max_row]:
            if cell.data_type == "f":
                cell.data_type = "s"

    for index, column in enumerate(columns, start=1):
        worksheet.column_dimensions[get_column_letter(index)].width = column.width

    buffer = BytesIO()
    workbook.save(buffer)
    workbook.close()
    return buffer.getvalue()


def write_properties(
    properties: Iterable[Property],
    columns: Sequence[ColumnSpec] = COLUMNS,
    sheet_name: str = EXPORT_SHEET_NAME,
) -> bytes:
    """Render properties as ``.xlsx`` bytes, one row per record."""
    return _write_sheet(sheet_name, (property_row(prop, columns) for prop in properties), columns)


def template_rows(today: date | None = None) -> list[list[str | None]]:
    """The two sample rows of the import template, in column order."""
    today_str = (today or date.today()).isoformat()
    rows = []
    for sample in TEMPLATE_ROWS:
        values = dict(sample, Date=today_str)
        rows.append([cell_value(values.get(column.header)) for column in COLUMNS])
    return rows


def build_template(today: date | None = None, sheet_name: str = TEMPLATE_SHEET_NAME) -> bytes:
    """Render the two-row import template as ``.xlsx`` bytes."""
    return _write_sheet(sheet_name, template_rows(today), COLUMNS)
