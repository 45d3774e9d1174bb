"""Ports for persisting shipment records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shiptrack.domain.model import ShipmentRecord


@runtime_checkable
class ShipmentRepository(Protocol):
    """Persistence contract for shipment records keyed by tracking number."""

    def find_by_tracking_number(self, tracking_number: str) -> ShipmentRecord | None: ...

    def save(self, record: ShipmentRecord) -> ShipmentRecord:
        """Insert or update ``record``; assigns id and timestamps on insert."""
        ...
