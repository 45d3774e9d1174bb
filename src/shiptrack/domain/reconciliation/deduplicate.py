"""Event deduplication against persisted history.

Responsibilities of this stage:
- decide which incoming events are not yet part of a record's history
- keep the incoming order of the events it lets through
- avoid persistence lookups; callers pass the existing history in

Identity is the exact ``(date, time, description)`` triple. Location and the
irregularity flag are not part of the key, so two scans that only differ there
collapse into one. Incoming events are not deduplicated among themselves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shiptrack.domain.model import ShipmentEvent

type EventKey = tuple[str, str, str]


def event_key(event: ShipmentEvent) -> EventKey:
    return (event.date, event.time, event.description)


def new_events(
    incoming: Iterable[ShipmentEvent],
    existing: Iterable[ShipmentEvent],
) -> list[ShipmentEvent]:
    """Return the ``incoming`` events whose key does not occur in ``existing``."""

    known = {event_key(event) for event in existing}
    return [event for event in incoming if event_key(event) not in known]
