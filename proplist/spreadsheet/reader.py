"""Spreadsheet reader.

Turns workbook bytes into header-keyed rows. Only the first sheet is read and
its first row is taken as the header row.
"""

import logging
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Any
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from proplist.exceptions import ParseError

logger = logging.getLogger(__name__)

EMPTY_FILE_MESSAGE = "Empty file: no data rows found in the spreadsheet"
SUPPORTED_EXTENSIONS = (".xlsx", ".xls")

RawRow = dict[str, Any]


@dataclass
class ParsedSheet:
    """Header row and data rows of the first worksheet.

    ``row_numbers[i]`` is the 1-based sheet row that ``rows[i]`` came from.
    """

    sheet_name: str
    headers: list[str]
    rows: list[RawRow] = field(default_factory=list)
    row_numbers: list[int] = field(default_factory=list)


def is_blank(value: Any) -> bool:
    """True for ``None`` and strings that trim to nothing."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def check_extension(filename: str | Path) -> None:
    """Reject files that are not Excel workbooks by name."""
    if Path(filename).suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise ParseError("Invalid file type: please select an Excel file (.xlsx or .xls)")


def read_spreadsheet(data: bytes) -> ParsedSheet:
    """Parse workbook bytes into header-keyed rows.

    Parameters
    ----------
    data : bytes
        Raw ``.xlsx`` content.

    Returns
    -------
    ParsedSheet
        Trimmed headers and one mapping per non-blank data row. Cells with no
        value are returned as ``""``.

    Raises
    ------
    ParseError
        If the bytes are not a readable workbook or there are no data rows.
    """
    try:
        workbook = load_workbook(BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError, ValueError) as exc:
        raise ParseError(
            f"Failed to parse spreadsheet: {exc}. "
            "Please check the format and ensure it's a valid Excel file."
        ) from exc

    try:
        if not workbook.worksheets:
            raise ParseError(EMPTY_FILE_MESSAGE)
        worksheet = workbook.worksheets[0]
        sheet_name = worksheet.title
        raw_rows = [tuple(row) for row in worksheet.iter_rows(values_only=True)]
    finally:
        workbook.close()

    logger.debug("Sheet %r has %d raw rows", sheet_name, len(raw_rows))

    if not raw_rows:
        raise ParseError(EMPTY_FILE_MESSAGE)

    headers = ["" if cell is None else str(cell).strip() for cell in raw_rows[0]]
    rows: list[RawRow] = []
    row_numbers: list[int] = []
    for sheet_row, values in enumerate(raw_rows[1:], start=2):
        if all(is_blank(value) for value in values):
            continue
        row: RawRow = {}
        for index, header in enumerate(headers):
            if not header:
                continue
            value = values[index] if index < len(values) else None
            row[header] = "" if value is None else value
        rows.append(row)
        row_numbers.append(sheet_row)

    if not rows:
        raise ParseError(EMPTY_FILE_MESSAGE)

    logger.info("Read %d data rows with headers: %s", len(rows), ", ".join(h for h in headers if h))
    return ParsedSheet(
        sheet_name=sheet_name,
        headers=[h for h in headers if h],
        rows=rows,
        row_numbers=row_numbers,
    )


def read_spreadsheet_file(path: str | Path) -> ParsedSheet:
    """Read and parse a workbook from disk."""
    path = Path(path)
    check_extension(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ParseError(f"Failed to read file: {exc}") from exc
    return read_spreadsheet(data)
