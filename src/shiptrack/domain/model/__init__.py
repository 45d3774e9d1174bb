"""Public domain model surface."""

from __future__ import annotations

from shiptrack.domain.model.primitives import Address, CarrierName, TrackingNumber
from shiptrack.domain.model.shipment import (
    ShipmentEvent,
    ShipmentRecord,
    ShipmentSnapshot,
    new_id,
)

__all__ = [
    "Address",
    "CarrierName",
    "ShipmentEvent",
    "ShipmentRecord",
    "ShipmentSnapshot",
    "TrackingNumber",
    "new_id",
]
