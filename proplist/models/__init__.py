"""Property listing models."""

from proplist.models.enums import DateRange, PropertyType
from proplist.models.property import (
    VARIANT_DETAILS,
    CandidateRecord,
    CommercialDetails,
    FlatDetails,
    KothiDetails,
    PlotDetails,
    Property,
    PropertyDetails,
    details_class,
)

__all__ = [
    "CandidateRecord",
    "CommercialDetails",
    "DateRange",
    "FlatDetails",
    "KothiDetails",
    "PlotDetails",
    "Property",
    "PropertyDetails",
    "PropertyType",
    "VARIANT_DETAILS",
    "details_class",
]
