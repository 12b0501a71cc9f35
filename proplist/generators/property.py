"""Synthetic property listings for demos and sample spreadsheets."""

from datetime import date, timedelta

from proplist.generators.base import BaseGenerator
from proplist.models import (
    CommercialDetails,
    FlatDetails,
    KothiDetails,
    PlotDetails,
    Property,
    PropertyDetails,
    PropertyType,
)

FACINGS = ["North", "South", "East", "West", "North-East", "North-West", "South-East", "South-West"]
ROAD_WIDTHS = ["12 feet", "18 feet", "24 feet", "30 feet", "40 feet", "60 feet"]
COMMERCIAL_TYPES = ["Shop", "Office", "Showroom", "SCO", "Booth"]
EXPECTATIONS = [
    "Ready to move",
    "Immediate possession",
    "Negotiable",
    "Urgent sale",
    "Clear title",
    "",
]
PROJECT_SUFFIXES = ["Apartments", "Heights", "Residency", "Towers", "Greens", "Enclave"]


class PropertyGenerator(BaseGenerator):
    """Generate synthetic property listings of every variant."""

    def generate(self, property_type: PropertyType | None = None, today: date | None = None) -> Property:
        """Generate one property.

        Parameters
        ----------
        property_type : PropertyType | None
            Variant to generate; random when ``None``.
        today : date | None
            Listing dates fall within the 120 days before this.

        Returns
        -------
        Property
            Unsaved property (no id, no timestamps).
        """
        property_type = property_type or self.random.choice(list(PropertyType))
        today = today or date.today()
        marla = self.random.choice([3, 5, 7, 10, 12, 20])

        return Property(
            property_type=property_type,
            details=self._details(property_type),
            sector_phase=self.random.choice(["Sector", "Phase"]) + f" {self.random.randint(1, 120)}",
            plot_size=f"{marla * 25} sq yards",
            marla=str(marla),
            plc=f"{self.random.choice([0, 5, 10, 15])}%",
            road=self.random.choice(ROAD_WIDTHS),
            cp_name=self.fake.name(),
            contact_number=str(self.random.randint(6000000000, 9999999999)),
            cp_firm_name=f"{self.fake.last_name()} {self.random.choice(['Realty', 'Properties', 'Estates'])}",
            demand=self._demand(),
            expectations=self.random.choice(EXPECTATIONS),
            date=(today - timedelta(days=self.random.randint(0, 120))).isoformat(),
            facing=self.random.choice(FACINGS),
        )

    def generate_many(self, count: int, today: date | None = None) -> list[Property]:
        """Generate ``count`` properties of mixed variants."""
        return [self.generate(today=today) for _ in range(count)]

    def _demand(self) -> str:
        if self.random.random() < 0.3:
            return f"{self.random.randint(1, 9)}.{self.random.randint(0, 9)} Crore"
        return f"{self.random.randint(20, 99)} Lakh"

    def _details(self, property_type: PropertyType) -> PropertyDetails:
        if property_type == PropertyType.KOTHI:
            return KothiDetails(kothi_number=str(self.random.randint(1, 3000)))
        if property_type == PropertyType.PLOT:
            return PlotDetails(plot_number=str(self.random.randint(1, 3000)))
        if property_type == PropertyType.FLAT:
            return FlatDetails(
                project=f"{self.fake.last_name()} {self.random.choice(PROJECT_SUFFIXES)}",
                floor=str(self.random.randint(0, 14)),
                bhk=f"{self.random.randint(1, 4)}BHK",
            )
        if property_type == PropertyType.COMMERCIAL:
            return CommercialDetails(
                commercial_type=self.random.choice(COMMERCIAL_TYPES),
                area=f"{self.random.randint(200, 4000)} sq ft",
                floor=str(self.random.randint(0, 4)),
            )
        raise ValueError(f"Unsupported property type: {property_type!r}")
