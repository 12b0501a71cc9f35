"""Filtering and lookup helpers over fetched property lists."""

import calendar
from collections import Counter
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from proplist.models import DateRange, Property, PropertyType


@dataclass
class SearchFilters:
    """Exact-match filters; ``None`` means "any"."""

    property_type: PropertyType | None = None
    project: str | None = None
    sector_phase: str | None = None
    contact_number: str | None = None
    cp_name: str | None = None

    def matches(self, prop: Property) -> bool:
        if self.property_type is not None and prop.property_type != self.property_type:
            return False
        if self.project is not None and prop.project != self.project:
            return False
        if self.sector_phase is not None and prop.sector_phase != self.sector_phase:
            return False
        if self.contact_number is not None and prop.contact_number != self.contact_number:
            return False
        if self.cp_name is not None and prop.cp_name != self.cp_name:
            return False
        return True


def matches_term(prop: Property, term: str) -> bool:
    """Free-text match over the fields people search by.

    Contact numbers are matched as typed; the other fields ignore case.
    """
    if not term:
        return True
    lowered = term.lower()
    if term in prop.contact_number:
        return True
    return any(
        lowered in value.lower()
        for value in (prop.sector_phase, prop.cp_name, prop.cp_firm_name, prop.project)
    )


def search(
    properties: Iterable[Property],
    filters: SearchFilters | None = None,
    term: str = "",
) -> list[Property]:
    """Apply the free-text term and then the exact filters."""
    filters = filters or SearchFilters()
    return [p for p in properties if matches_term(p, term) and filters.matches(p)]


def _months_back(day: date, months: int) -> date:
    month_index = day.month - 1 - months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def range_start(date_range: DateRange, today: date) -> date | None:
    """First day included by ``date_range``, or ``None`` for no bound."""
    if date_range == DateRange.WEEK:
        return today - timedelta(days=7)
    if date_range == DateRange.MONTH:
        return _months_back(today, 1)
    if date_range == DateRange.QUARTER:
        return _months_back(today, 3)
    return None


def _parse_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


@dataclass
class ExportFilters:
    """Filters offered when exporting."""

    property_type: PropertyType | None = None
    sector_phase: str | None = None
    date_range: DateRange = DateRange.ALL

    def apply(self, properties: Iterable[Property], today: date | None = None) -> list[Property]:
        start = range_start(self.date_range, today or date.today())
        result = []
        for prop in properties:
            if self.property_type is not None and prop.property_type != self.property_type:
                continue
            if self.sector_phase is not None and prop.sector_phase != self.sector_phase:
                continue
            if start is not None:
                listed = _parse_date(prop.date)
                if listed is None or listed < start:
                    continue
            result.append(prop)
        return result


def unique_values(properties: Iterable[Property], attr: str) -> list[str]:
    """Distinct non-empty values of ``attr`` in first-seen order."""
    seen: dict[str, None] = {}
    for prop in properties:
        value = getattr(prop, attr)
        if value:
            seen.setdefault(value, None)
    return list(seen)


def unique_projects(properties: Iterable[Property]) -> list[str]:
    return unique_values((p for p in properties if p.property_type == PropertyType.FLAT), "project")


def count_by_type(properties: Iterable[Property]) -> dict[PropertyType, int]:
    """Number of records per property type, including zero counts."""
    counts = Counter(p.property_type for p in properties)
    return {property_type: counts.get(property_type, 0) for property_type in PropertyType}
