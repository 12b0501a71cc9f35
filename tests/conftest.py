"""Pytest configuration and fixtures."""

import logging
from datetime import date
from io import BytesIO
from typing import Any, Callable, Iterator, Sequence

import pytest
from openpyxl import Workbook

from proplist.exceptions import StoreError
from proplist.models import (
    CommercialDetails,
    FlatDetails,
    KothiDetails,
    PlotDetails,
    Property,
    PropertyType,
)
from proplist.store import InMemoryPropertyStore

WorkbookFactory = Callable[..., bytes]


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Undo handler and level changes made by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def today() -> date:
    """Fixed 'today' so defaulted dates are predictable."""
    return date(2024, 6, 15)


@pytest.fixture
def make_workbook() -> WorkbookFactory:
    """Build ``.xlsx`` bytes from a header row and data rows."""

    def _make(
        headers: Sequence[Any] | None,
        rows: Sequence[Sequence[Any]] = (),
        extra_sheets: dict[str, Sequence[Sequence[Any]]] | None = None,
    ) -> bytes:
        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = "Sheet1"
        if headers is not None:
            worksheet.append(list(headers))
        for row in rows:
            worksheet.append(list(row))
        for title, sheet_rows in (extra_sheets or {}).items():
            extra = workbook.create_sheet(title)
            for row in sheet_rows:
                extra.append(list(row))
        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    return _make


@pytest.fixture
def kothi() -> Property:
    return Property(
        property_type=PropertyType.KOTHI,
        details=KothiDetails(kothi_number="123"),
        sector_phase="Sector 1",
        plot_size="200 sq yards",
        marla="5",
        plc="10%",
        road="30 feet",
        cp_name="John Doe",
        contact_number="9876543210",
        cp_firm_name="ABC Realty",
        demand="50 Lakh",
        expectations="Ready to move",
        date="2024-06-01",
        facing="North",
    )


@pytest.fixture
def flat() -> Property:
    return Property(
        property_type=PropertyType.FLAT,
        details=FlatDetails(project="Green Valley Apartments", floor="3", bhk="3BHK"),
        sector_phase="Sector 2",
        plot_size="1200 sq ft",
        marla="3",
        plc="5%",
        road="24 feet",
        cp_name="Jane Smith",
        contact_number="9876543211",
        cp_firm_name="XYZ Properties",
        demand="35 Lakh",
        expectations="Immediate possession",
        date="2024-05-20",
        facing="East",
    )


@pytest.fixture
def commercial() -> Property:
    return Property(
        property_type=PropertyType.COMMERCIAL,
        details=CommercialDetails(commercial_type="Shop", area="400 sq ft", floor="0"),
        sector_phase="Phase 7",
        cp_name="Ravi Kumar",
        contact_number="9811122233",
        demand="1.2 Crore",
        date="2024-03-01",
    )


@pytest.fixture
def plot() -> Property:
    return Property(
        property_type=PropertyType.PLOT,
        details=PlotDetails(plot_number="77"),
        sector_phase="Sector 1",
        plot_size="500 sq yards",
        cp_name="Anita Sharma",
        contact_number="9000000001",
        demand="2 Crore",
        date="2024-06-10",
    )


class FlakyStore(InMemoryPropertyStore):
    """In-memory store that rejects chosen add calls (1-based)."""

    def __init__(self, fail_on: set[int] | None = None, reason: str = "quota exceeded") -> None:
        super().__init__()
        self.fail_on = fail_on or set()
        self.reason = reason
        self.add_calls = 0

    async def add(self, prop: Property) -> str:
        self.add_calls += 1
        if self.add_calls in self.fail_on:
            raise StoreError(self.reason)
        return await super().add(prop)


@pytest.fixture
def store() -> InMemoryPropertyStore:
    """Create a fresh store for each test."""
    return InMemoryPropertyStore()


@pytest.fixture
def flaky_store_factory() -> Callable[..., FlakyStore]:
    return FlakyStore
