"""Conversion between typed records and store documents.

Store documents are flat dicts keyed by the camelCase field keys of the
column mapping, plus ``id``, ``createdAt`` and ``updatedAt``.
"""

import logging
from dataclasses import fields
from datetime import datetime
from typing import Any, Mapping

from proplist.exceptions import InvalidRecordError
from proplist.mapping import COLUMNS, column_for_attr
from proplist.models import VARIANT_DETAILS, CandidateRecord, Property, PropertyType, details_class

logger = logging.getLogger(__name__)

_STORE_ATTRS = ("property_type", "details", "id", "created_at", "updated_at")

# Fields shared by every variant, in declaration order
BASE_ATTRS: tuple[str, ...] = tuple(f.name for f in fields(Property) if f.name not in _STORE_ATTRS)

VARIANT_KEYS: dict[PropertyType, frozenset[str]] = {
    property_type: frozenset(column_for_attr(f.name).key for f in fields(cls))
    for property_type, cls in VARIANT_DETAILS.items()
}
ALL_VARIANT_KEYS: frozenset[str] = frozenset().union(*VARIANT_KEYS.values())

MAPPED_KEYS: frozenset[str] = frozenset(column.key for column in COLUMNS)


def serialize_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO timestamp from a store document."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as exc:
        raise InvalidRecordError(f"Invalid timestamp {value!r}") from exc


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def to_document(prop: Property) -> dict[str, Any]:
    """Convert a property to a store document.

    Only the variant fields of the record's own variant are emitted, in
    column mapping order.
    """
    own_keys = VARIANT_KEYS[prop.property_type]
    document: dict[str, Any] = {}
    if prop.id is not None:
        document["id"] = prop.id

    for column in COLUMNS:
        if column.key == "propertyType":
            document[column.key] = prop.property_type.value
        elif column.key in own_keys:
            document[column.key] = getattr(prop.details, column.attr)
        elif column.attr in BASE_ATTRS:
            document[column.key] = getattr(prop, column.attr)

    if prop.created_at is not None:
        document["createdAt"] = serialize_timestamp(prop.created_at)
    if prop.updated_at is not None:
        document["updatedAt"] = serialize_timestamp(prop.updated_at)
    return document


def from_document(document: Mapping[str, Any]) -> Property:
    """Build a typed property from a store document.

    Raises
    ------
    InvalidRecordError
        If ``propertyType`` is missing or not one of the canonical labels.
    """
    raw_type = document.get("propertyType")
    if not raw_type:
        raise InvalidRecordError("Property Type is required")
    if not PropertyType.is_canonical(raw_type):
        raise InvalidRecordError(
            f"Invalid Property Type '{raw_type}'. Must be: Kothi, Flat, Commercial, or Plot"
        )

    property_type = PropertyType(raw_type)
    cls = details_class(property_type)
    details = cls(**{f.name: _text(document.get(column_for_attr(f.name).key)) for f in fields(cls)})
    base = {attr: _text(document.get(column_for_attr(attr).key)) for attr in BASE_ATTRS}

    return Property(
        property_type=property_type,
        details=details,
        id=document.get("id"),
        created_at=parse_timestamp(document.get("createdAt")),
        updated_at=parse_timestamp(document.get("updatedAt")),
        **base,
    )


def candidate_to_document(candidate: CandidateRecord) -> dict[str, str]:
    """Field-key dict of every field present on the candidate."""
    document = {}
    for column in COLUMNS:
        value = getattr(candidate, column.attr)
        if value is not None:
            document[column.key] = value
    return document


def candidate_to_property(candidate: CandidateRecord) -> Property:
    """Type an eligible candidate record.

    Variant-only fields that belong to another variant are dropped.
    """
    document = candidate_to_document(candidate)
    prop = from_document(document)

    dropped = sorted(
        key for key in document if key in ALL_VARIANT_KEYS - VARIANT_KEYS[prop.property_type]
    )
    if dropped:
        logger.debug(
            "Dropping fields %s not used by %s properties",
            ", ".join(dropped),
            prop.property_type.value,
        )
    return prop


def property_to_candidate(prop: Property) -> CandidateRecord:
    """Inverse of :func:`candidate_to_property`; empty fields become ``None``."""
    document = to_document(prop)
    values = {}
    for column in COLUMNS:
        value = document.get(column.key)
        values[column.attr] = value if value else None
    return CandidateRecord(**values)


def check_field_keys(changes: Mapping[str, Any]) -> None:
    """Reject keys that are not mapped field keys."""
    unknown = sorted(set(changes) - MAPPED_KEYS)
    if unknown:
        raise InvalidRecordError(f"Unknown field(s): {', '.join(unknown)}")


def apply_changes(prop: Property, changes: Mapping[str, Any]) -> Property:
    """Merge a partial document into a property and re-type the result.

    Changing ``propertyType`` switches the variant; variant fields the new
    variant does not use are dropped.
    """
    check_field_keys(changes)
    document = to_document(prop)
    document.update(changes)
    return from_document(document)
