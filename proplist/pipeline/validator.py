"""Per-row validation of candidate records.

Validation never raises: each record yields a list of messages, and an empty
list means the record may be imported. Rules look at one record at a time.
"""

import logging
from typing import Sequence

from proplist.models import CandidateRecord, PropertyType
from proplist.pipeline.normalizer import row_number

logger = logging.getLogger(__name__)

_TYPE_CHOICES = "Kothi, Flat, Commercial, or Plot"

# Missing these only produces a warning
SOFT_REQUIRED = (
    ("sector_phase", "Sector/Phase"),
    ("cp_name", "CP Name"),
    ("contact_number", "Contact Number"),
)


def validate_record(candidate: CandidateRecord, row: int) -> list[str]:
    """Return the blocking violations for one record."""
    errors = []
    if not candidate.property_type:
        errors.append(f"Row {row}: Property Type is required")
    elif not PropertyType.is_canonical(candidate.property_type):
        errors.append(
            f"Row {row}: Invalid Property Type '{candidate.property_type}'. Must be: {_TYPE_CHOICES}"
        )

    if candidate.property_type == PropertyType.FLAT.value and not candidate.project:
        errors.append(f"Row {row}: Project is required for Flat properties")
    return errors


def collect_warnings(candidate: CandidateRecord, row: int) -> list[str]:
    """Return the non-blocking warnings for one record."""
    return [
        f"Row {row}: Missing {label}"
        for attr, label in SOFT_REQUIRED
        if not getattr(candidate, attr)
    ]


def _sheet_rows(candidates: Sequence[CandidateRecord], row_numbers: Sequence[int] | None) -> Sequence[int]:
    if row_numbers is None:
        return [row_number(index) for index in range(len(candidates))]
    if len(row_numbers) != len(candidates):
        raise ValueError(f"Got {len(row_numbers)} row numbers for {len(candidates)} records")
    return row_numbers


def validate_records(
    candidates: Sequence[CandidateRecord],
    row_numbers: Sequence[int] | None = None,
) -> tuple[list[str], list[str]]:
    """Validate a batch, returning ``(errors, warnings)`` in row order.

    ``row_numbers`` gives the sheet row of each candidate; without it rows
    are assumed to follow the header with no gaps.
    """
    errors: list[str] = []
    warnings: list[str] = []
    for candidate, row in zip(candidates, _sheet_rows(candidates, row_numbers)):
        errors.extend(validate_record(candidate, row))
        for warning in collect_warnings(candidate, row):
            logger.info("Warning - %s", warning, extra={"row": row})
            warnings.append(warning)
    return errors, warnings


def is_eligible(candidate: CandidateRecord) -> bool:
    """True if the record carries a canonical property type."""
    return PropertyType.is_canonical(candidate.property_type)


def filter_eligible(
    candidates: Sequence[CandidateRecord],
    row_numbers: Sequence[int] | None = None,
) -> list[CandidateRecord]:
    """Drop every record without a canonical property type."""
    eligible = []
    for candidate, row in zip(candidates, _sheet_rows(candidates, row_numbers)):
        if is_eligible(candidate):
            eligible.append(candidate)
        else:
            logger.info(
                "Row %d filtered out - missing or invalid property type: %r",
                row,
                candidate.property_type,
                extra={"row": row},
            )
    return eligible
