"""Shipment aggregate: tracked parcels, their scan events and parsed snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from shiptrack.domain.model.primitives import Address

if TYPE_CHECKING:
    from datetime import datetime

    from shiptrack.domain.model.primitives import CarrierName, TrackingNumber


def new_id() -> UUID:
    return uuid4()


@dataclass(eq=False, kw_only=True)
class ShipmentEvent:
    """One tracking scan. Date and time stay in the carrier's own string format."""

    id: UUID = field(default_factory=new_id)
    date: str = ""
    time: str = ""
    location: str = ""
    description: str = ""
    irregularity: bool = False
    # set by the store when the scan is first saved
    recorded_at: datetime | None = None

    # owner back-reference, persistence only
    record_id: UUID | None = field(default=None, repr=False)


@dataclass(eq=False, kw_only=True)
class ShipmentRecord:
    """A tracked parcel as persisted by the tracking store.

    ``id``, ``created_at`` and ``updated_at`` are managed by the store; ``id`` stays
    ``None`` until the record is saved for the first time.
    """

    tracking_number: TrackingNumber
    carrier: CarrierName
    status: str | None = None
    sender: Address = field(default_factory=Address)
    destination: Address = field(default_factory=Address)

    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    _events: list[ShipmentEvent] = field(default_factory=list["ShipmentEvent"], repr=False)

    @property
    def events(self) -> tuple[ShipmentEvent, ...]:
        return tuple(self._events)

    def append_event(self, event: ShipmentEvent) -> None:
        """Take ownership of ``event`` and append it after the existing history."""
        if event.record_id is not None and event.record_id != self.id:
            raise ValueError("event already belongs to another shipment record")
        event.record_id = self.id
        self._events.append(event)


@dataclass(frozen=True, kw_only=True)
class ShipmentSnapshot:
    """One shipment as reported by a single carrier response, not yet persisted."""

    tracking_number: TrackingNumber
    carrier: CarrierName
    status: str | None = None
    sender: Address = field(default_factory=Address)
    destination: Address = field(default_factory=Address)
    events: tuple[ShipmentEvent, ...] = ()

    def to_record(self) -> ShipmentRecord:
        record = ShipmentRecord(
            tracking_number=self.tracking_number,
            carrier=self.carrier,
            status=self.status,
            sender=self.sender,
            destination=self.destination,
        )
        for event in self.events:
            record.append_event(event)
        return record
