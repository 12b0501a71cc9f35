"""Spreadsheet reading and writing."""

from proplist.spreadsheet.reader import (
    ParsedSheet,
    RawRow,
    check_extension,
    read_spreadsheet,
    read_spreadsheet_file,
)
from proplist.spreadsheet.writer import (
    TEMPLATE_FILENAME,
    build_template,
    export_filename,
    property_row,
    write_properties,
)

__all__ = [
    "ParsedSheet",
    "RawRow",
    "TEMPLATE_FILENAME",
    "build_template",
    "check_extension",
    "export_filename",
    "property_row",
    "read_spreadsheet",
    "read_spreadsheet_file",
    "write_properties",
]
