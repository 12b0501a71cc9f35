"""Raw spreadsheet rows to candidate records."""

import logging
from datetime import date, datetime, time
from typing import Any, Iterable, Mapping

from proplist.mapping import COLUMNS, find_cell
from proplist.models import CandidateRecord, PropertyType
from proplist.spreadsheet.reader import is_blank

logger = logging.getLogger(__name__)

# Data rows start on sheet row 2
HEADER_OFFSET = 2


def row_number(index: int) -> int:
    """Sheet row number of the data row at 0-based ``index``."""
    return index + HEADER_OFFSET


def cell_to_text(value: Any) -> str:
    """Render a cell value the way a user reading the sheet would see it."""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0):
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def normalize_row(row: Mapping[str, Any], today: date | None = None) -> CandidateRecord:
    """Map one raw row onto a candidate record.

    Blank cells leave the field unset. ``date`` defaults to ``today`` and
    ``property_type`` is canonicalized.
    """
    values: dict[str, str] = {}
    for column in COLUMNS:
        found, value = find_cell(row, column.header)
        if not found or is_blank(value):
            continue
        text = cell_to_text(value)
        if text:
            values[column.attr] = text

    candidate = CandidateRecord(**values)
    if candidate.date is None:
        candidate.date = (today or date.today()).isoformat()
    if candidate.property_type is not None:
        candidate.property_type = PropertyType.canonicalize(candidate.property_type)
    return candidate


def normalize_rows(rows: Iterable[Mapping[str, Any]], today: date | None = None) -> list[CandidateRecord]:
    """Normalize every row, preserving order."""
    today = today or date.today()
    candidates = []
    for index, row in enumerate(rows):
        candidate = normalize_row(row, today)
        logger.debug("Row %d normalized: %s", row_number(index), candidate)
        candidates.append(candidate)
    return candidates
