"""Spreadsheet import: parse, normalize, validate, then bulk write."""

import logging
from dataclasses import dataclass, field
from datetime import date

from proplist.config import ImportConfig
from proplist.exceptions import EmptyResultError
from proplist.models import CandidateRecord, PropertyType
from proplist.pipeline.batch_writer import BatchWriter, ProgressCallback
from proplist.pipeline.normalizer import normalize_rows
from proplist.pipeline.validator import filter_eligible, is_eligible, validate_records
from proplist.serialization import candidate_to_property
from proplist.spreadsheet.reader import read_spreadsheet
from proplist.store.base import PropertyStore

logger = logging.getLogger(__name__)


@dataclass
class ImportPreview:
    """Outcome of reading and checking a spreadsheet, before any writes."""

    headers: list[str]
    candidates: list[CandidateRecord]
    eligible: list[CandidateRecord]
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.eligible)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def preview(self, limit: int = 5) -> list[CandidateRecord]:
        """First ``limit`` eligible records, for display."""
        return self.eligible[:limit]


@dataclass
class ImportResult:
    ids: list[str]

    @property
    def count(self) -> int:
        return len(self.ids)


def _no_valid_rows_error(headers: list[str], row_count: int) -> EmptyResultError:
    choices = ", ".join(PropertyType.labels())
    columns = ", ".join(headers) if headers else "(none)"
    return EmptyResultError(
        "No valid properties found. Please ensure your Excel file has a 'Property Type' "
        f"column with values: {choices}.\n"
        f"Found {row_count} rows but none had valid property types.\n"
        f"Available columns in your file: {columns}",
        found_columns=headers,
    )


def prepare_import(data: bytes, today: date | None = None) -> ImportPreview:
    """Read a workbook and check every row without touching the store.

    Raises
    ------
    ParseError
        If the file cannot be read or has no data rows.
    EmptyResultError
        If no row has a valid property type.
    """
    sheet = read_spreadsheet(data)
    candidates = normalize_rows(sheet.rows, today)
    errors, warnings = validate_records(candidates, sheet.row_numbers)
    eligible = filter_eligible(candidates, sheet.row_numbers)

    logger.info("Valid properties after filtering: %d out of %d", len(eligible), len(candidates))
    if not eligible:
        raise _no_valid_rows_error(sheet.headers, len(candidates))

    return ImportPreview(
        headers=sheet.headers,
        candidates=candidates,
        eligible=eligible,
        errors=errors,
        warnings=warnings,
    )


async def run_import(
    preview: ImportPreview,
    store: PropertyStore,
    config: ImportConfig | None = None,
    on_progress: ProgressCallback | None = None,
) -> ImportResult:
    """Write the eligible records of ``preview`` to ``store``.

    Hard validation errors are not checked here; callers decide whether to
    go ahead while ``preview.errors`` is non-empty.

    Raises
    ------
    EmptyResultError
        If there is nothing eligible to write.
    StoreWriteError
        If the store rejects a record.
    """
    config = config or ImportConfig()
    eligible = [candidate for candidate in preview.eligible if is_eligible(candidate)]
    if not eligible:
        raise _no_valid_rows_error(preview.headers, len(preview.candidates))

    records = [candidate_to_property(candidate) for candidate in eligible]
    writer = BatchWriter(store, batch_size=config.batch_size, delay_seconds=config.batch_delay_seconds)
    ids = await writer.write(records, on_progress=on_progress)
    logger.info("Successfully imported %d properties", len(ids))
    return ImportResult(ids=ids)
