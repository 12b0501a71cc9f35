"""Import and export pipeline."""

from proplist.pipeline.batch_writer import BatchWriter, chunked
from proplist.pipeline.exporter import ExportResult, export_properties
from proplist.pipeline.importer import ImportPreview, ImportResult, prepare_import, run_import
from proplist.pipeline.normalizer import normalize_row, normalize_rows, row_number
from proplist.pipeline.validator import (
    collect_warnings,
    filter_eligible,
    is_eligible,
    validate_record,
    validate_records,
)

__all__ = [
    "BatchWriter",
    "ExportResult",
    "ImportPreview",
    "ImportResult",
    "chunked",
    "collect_warnings",
    "export_properties",
    "filter_eligible",
    "is_eligible",
    "normalize_row",
    "normalize_rows",
    "prepare_import",
    "row_number",
    "run_import",
    "validate_record",
    "validate_records",
]
