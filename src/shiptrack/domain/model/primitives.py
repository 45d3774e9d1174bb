"""Domain primitives: scalar aliases + small value objects."""

from __future__ import annotations

from dataclasses import dataclass

type TrackingNumber = str
type CarrierName = str


@dataclass(frozen=True)
class Address:
    """Postal party as reported by the carrier: a name plus four address lines."""

    name: str = ""
    street: str = ""
    municipality: str = ""
    postcode: str = ""
    country: str = ""

    def __composite_values__(self) -> tuple[str, str, str, str, str]:
        """For SQLAlchemy composite columns (adapter-side convenience)."""
        return (self.name, self.street, self.municipality, self.postcode, self.country)
