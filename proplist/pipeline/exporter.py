"""Spreadsheet export of already-fetched properties."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from proplist.exceptions import EmptyResultError
from proplist.models import Property
from proplist.search import ExportFilters
from proplist.spreadsheet.writer import EXPORT_SHEET_NAME, export_filename, write_properties

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    filename: str
    content: bytes
    count: int


def export_properties(
    properties: Iterable[Property],
    filters: ExportFilters | None = None,
    today: date | None = None,
    sheet_name: str = EXPORT_SHEET_NAME,
) -> ExportResult:
    """Filter properties and render them as a dated ``.xlsx`` export.

    Raises
    ------
    EmptyResultError
        If no property matches ``filters``.
    """
    today = today or date.today()
    selected = (filters or ExportFilters()).apply(properties, today)
    if not selected:
        raise EmptyResultError("No data to export: no properties match the current filters")

    filename = export_filename(today)
    content = write_properties(selected, sheet_name=sheet_name)
    logger.info("Exported %d properties to %s", len(selected), filename)
    return ExportResult(filename=filename, content=content, count=len(selected))
