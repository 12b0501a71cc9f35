"""Spreadsheet column mapping.

The same ordered table drives both directions: header -> field key when
importing, field key -> header when exporting.
"""

from typing import Any, Mapping, NamedTuple


class ColumnSpec(NamedTuple):
    """One spreadsheet column."""

    header: str  # Display header in the sheet
    key: str  # Field key in store documents
    attr: str  # Attribute on Property / CandidateRecord
    width: int  # Export column width in characters


COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("Property Type", "propertyType", "property_type", 15),
    ColumnSpec("Kothi Number", "kothiNumber", "kothi_number", 12),
    ColumnSpec("Plot Number", "plotNumber", "plot_number", 12),
    ColumnSpec("Project", "project", "project", 20),
    ColumnSpec("Floor", "floor", "floor", 8),
    ColumnSpec("BHK", "bhk", "bhk", 8),
    ColumnSpec("Commercial Type", "commercialType", "commercial_type", 15),
    ColumnSpec("Area", "area", "area", 10),
    ColumnSpec("Sector/Phase", "sectorPhase", "sector_phase", 15),
    ColumnSpec("Plot Size", "plotSize", "plot_size", 12),
    ColumnSpec("Marla", "marla", "marla", 8),
    ColumnSpec("PLC", "plc", "plc", 10),
    ColumnSpec("Road", "road", "road", 15),
    ColumnSpec("CP Name", "cpName", "cp_name", 20),
    ColumnSpec("Contact Number", "contactNumber", "contact_number", 15),
    ColumnSpec("CP Firm Name", "cpFirmName", "cp_firm_name", 20),
    ColumnSpec("Demand", "demand", "demand", 15),
    ColumnSpec("Expectations", "expectations", "expectations", 30),
    ColumnSpec("Date", "date", "date", 12),
    ColumnSpec("Facing", "facing", "facing", 12),
)

HEADERS: tuple[str, ...] = tuple(column.header for column in COLUMNS)
COLUMN_WIDTHS: tuple[int, ...] = tuple(column.width for column in COLUMNS)

_BY_KEY = {column.key: column for column in COLUMNS}
_BY_ATTR = {column.attr: column for column in COLUMNS}
_BY_HEADER = {column.header.lower(): column for column in COLUMNS}


def normalize_header(header: Any) -> str:
    """Lower-case and trim a header for loose comparison."""
    return str(header).strip().lower()


def header_for(key: str) -> str:
    """Return the display header for a field key."""
    return _BY_KEY[key].header


def key_for(header: str) -> str | None:
    """Return the field key for a display header, matched loosely."""
    column = _BY_HEADER.get(normalize_header(header))
    return column.key if column else None


def column_for_key(key: str) -> ColumnSpec:
    return _BY_KEY[key]


def column_for_attr(attr: str) -> ColumnSpec:
    return _BY_ATTR[attr]


def find_cell(row: Mapping[str, Any], header: str) -> tuple[bool, Any]:
    """Look up a cell by display header.

    The exact header is tried first, then every observed header is compared
    after trimming and lower-casing.

    Returns
    -------
    tuple[bool, Any]
        ``(found, value)``.
    """
    if header in row:
        return True, row[header]

    wanted = normalize_header(header)
    for observed, value in row.items():
        if normalize_header(observed) == wanted:
            return True, value
    return False, None


MAPPED_KEYS_HELP = "Field to set, by field key: " + ", ".join(column.key for column in COLUMNS)
