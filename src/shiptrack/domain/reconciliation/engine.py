"""Reconcile parsed shipment snapshots against the tracking store."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .deduplicate import new_events

if TYPE_CHECKING:
    from shiptrack.domain.model import ShipmentRecord, ShipmentSnapshot
    from shiptrack.domain.ports.persistence import ShipmentRepository

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Merge snapshots into persisted records with at most one write per snapshot."""

    repository: ShipmentRepository
    lookups: int = field(default=0, init=False)
    writes: int = field(default=0, init=False)

    def reconcile(self, snapshot: ShipmentSnapshot) -> ShipmentRecord:
        """Return the record for ``snapshot`` after merging it into the store.

        A snapshot that adds no events and does not change the status is a no-op:
        the stored record is returned as-is and nothing is written.
        """

        self.lookups += 1
        existing = self.repository.find_by_tracking_number(snapshot.tracking_number)
        if existing is None:
            log.info(
                "Storing new shipment %s with %s events",
                snapshot.tracking_number,
                len(snapshot.events),
            )
            return self._save(snapshot.to_record())

        changed = False

        fresh = new_events(snapshot.events, existing.events)
        for event in fresh:
            existing.append_event(event)
        if fresh:
            changed = True

        if snapshot.status is not None and snapshot.status != existing.status:
            log.info(
                "Shipment %s status changed: %r -> %r",
                existing.tracking_number,
                existing.status,
                snapshot.status,
            )
            existing.status = snapshot.status
            changed = True

        if not changed:
            log.debug("Shipment %s is up to date", existing.tracking_number)
            return existing

        log.info("Updating shipment %s: %s new events", existing.tracking_number, len(fresh))
        return self._save(existing)

    def _save(self, record: ShipmentRecord) -> ShipmentRecord:
        self.writes += 1
        return self.repository.save(record)
