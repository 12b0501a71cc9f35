"""Enumeration types for property listings."""

from enum import Enum


class PropertyType(str, Enum):
    KOTHI = "Kothi"
    FLAT = "Flat"
    COMMERCIAL = "Commercial"
    PLOT = "Plot"

    @classmethod
    def canonicalize(cls, raw: str) -> str:
        """Map a loosely typed label to its canonical form.

        ``" flat "`` becomes ``"Flat"``. Unknown labels come back trimmed
        but otherwise unchanged so validation can report them verbatim.
        """
        cleaned = raw.strip()
        lowered = cleaned.lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member.value
        return cleaned

    @classmethod
    def is_canonical(cls, value: str | None) -> bool:
        """Return True if ``value`` is exactly one of the canonical labels."""
        return value in cls.labels()

    @classmethod
    def labels(cls) -> list[str]:
        return [member.value for member in cls]


class DateRange(str, Enum):
    ALL = "all"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
