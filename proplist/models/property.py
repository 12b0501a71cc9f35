"""Property record model.

A property is one of four variants tagged by ``property_type``. Fields shared
by every variant live on :class:`Property`; fields that only make sense for a
single variant live on that variant's details object.
"""

from dataclasses import dataclass
from datetime import datetime

from proplist.exceptions import InvalidRecordError
from proplist.models.enums import PropertyType


@dataclass
class KothiDetails:
    kothi_number: str = ""


@dataclass
class PlotDetails:
    plot_number: str = ""


@dataclass
class FlatDetails:
    project: str = ""
    floor: str = ""
    bhk: str = ""


@dataclass
class CommercialDetails:
    commercial_type: str = ""
    area: str = ""
    floor: str = ""


PropertyDetails = KothiDetails | PlotDetails | FlatDetails | CommercialDetails

# Single dispatch table from tag to variant. Every PropertyType needs an entry.
VARIANT_DETAILS: dict[PropertyType, type] = {
    PropertyType.KOTHI: KothiDetails,
    PropertyType.FLAT: FlatDetails,
    PropertyType.COMMERCIAL: CommercialDetails,
    PropertyType.PLOT: PlotDetails,
}


def details_class(property_type: PropertyType) -> type:
    """Return the details dataclass registered for ``property_type``."""
    try:
        return VARIANT_DETAILS[property_type]
    except KeyError:
        raise InvalidRecordError(f"No variant registered for property type {property_type!r}") from None


@dataclass
class Property:
    """Persisted (or persistable) property listing."""

    property_type: PropertyType
    details: PropertyDetails
    sector_phase: str = ""
    plot_size: str = ""
    marla: str = ""
    plc: str = ""
    road: str = ""
    cp_name: str = ""
    contact_number: str = ""
    cp_firm_name: str = ""
    demand: str = ""
    expectations: str = ""
    date: str = ""
    facing: str = ""
    id: str | None = None
    created_at: datetime | None = None  # Assigned by the store
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        try:
            self.property_type = PropertyType(self.property_type)
        except ValueError:
            raise InvalidRecordError(f"Invalid Property Type '{self.property_type}'") from None
        expected = details_class(self.property_type)
        if type(self.details) is not expected:
            raise InvalidRecordError(
                f"{self.property_type.value} property needs {expected.__name__}, "
                f"got {type(self.details).__name__}"
            )

    @property
    def project(self) -> str:
        """Project name for flats, empty for every other variant."""
        if isinstance(self.details, FlatDetails):
            return self.details.project
        return ""


@dataclass
class CandidateRecord:
    """Spreadsheet row after column mapping, before validation.

    ``None`` marks a field whose cell was blank. ``property_type`` holds
    whatever the sheet said after canonicalization, so it may still be
    invalid here.
    """

    property_type: str | None = None
    kothi_number: str | None = None
    plot_number: str | None = None
    project: str | None = None
    floor: str | None = None
    bhk: str | None = None
    commercial_type: str | None = None
    area: str | None = None
    sector_phase: str | None = None
    plot_size: str | None = None
    marla: str | None = None
    plc: str | None = None
    road: str | None = None
    cp_name: str | None = None
    contact_number: str | None = None
    cp_firm_name: str | None = None
    demand: str | None = None
    expectations: str | None = None
    date: str | None = None
    facing: str | None = None
