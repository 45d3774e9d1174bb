"""Reconciliation core: merge carrier snapshots into persisted shipment history.

Flow per snapshot:
1) look up the stored record by tracking number
2) store the snapshot verbatim when nothing is stored yet
3) otherwise append unseen events and take over a changed status
4) write only when step 3 changed something
"""

from __future__ import annotations

from .deduplicate import EventKey, event_key, new_events
from .engine import ReconciliationEngine

__all__ = [
    "EventKey",
    "ReconciliationEngine",
    "event_key",
    "new_events",
]
