"""Public interface for the Bpost adapter."""

from __future__ import annotations

from .client import BpostGateway
from .schema import EventPayload, ItemPayload, PartyPayload, TrackItemsResponse
from .translator import decode_response, parse_item, parse_tracking_response

__all__ = [
    "BpostGateway",
    "EventPayload",
    "ItemPayload",
    "PartyPayload",
    "TrackItemsResponse",
    "decode_response",
    "parse_item",
    "parse_tracking_response",
]
