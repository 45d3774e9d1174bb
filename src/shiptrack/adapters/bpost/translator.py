"""Translate Bpost track-and-trace payloads into shipment snapshots."""

from __future__ import annotations

import json
from logging import getLogger

from pydantic import ValidationError

from shiptrack.config.bpost import BPOST_CARRIER_NAME
from shiptrack.domain.errors import MalformedPayloadError
from shiptrack.domain.model import Address, ShipmentEvent, ShipmentSnapshot

from .schema import EventPayload, ItemPayload, PartyPayload, TrackItemsResponse

log = getLogger(__name__)


def decode_response(payload: str | bytes | None) -> TrackItemsResponse:
    """Decode the raw response body, raising ``MalformedPayloadError`` on unreadable input."""

    if payload is None or not payload.strip():
        log.error("Malformed Bpost payload: empty response body")
        raise MalformedPayloadError("Failed to parse tracking JSON: empty response body")
    try:
        document = json.loads(payload)
        return TrackItemsResponse.model_validate(document)
    except (ValueError, RecursionError, ValidationError) as exc:
        log.error("Malformed Bpost payload: %s", exc)
        raise MalformedPayloadError(f"Failed to parse tracking JSON: {exc}") from exc


def parse_tracking_response(
    payload: str | bytes | None,
    *,
    carrier: str = BPOST_CARRIER_NAME,
) -> list[ShipmentSnapshot]:
    """Return one snapshot per reported item, in payload order."""

    response = decode_response(payload)
    return [parse_item(item, carrier=carrier) for item in response.items]


def parse_item(item: ItemPayload, *, carrier: str = BPOST_CARRIER_NAME) -> ShipmentSnapshot:
    events = tuple(_build_event(event) for event in item.events)
    # carriers list the newest event first
    status = item.events[0].description if item.events else None
    return ShipmentSnapshot(
        tracking_number=item.item_code,
        carrier=carrier,
        status=status,
        sender=_build_address(item.sender),
        destination=_build_address(item.receiver),
        events=events,
    )


def _build_address(party: PartyPayload) -> Address:
    return Address(
        name=party.name,
        street=party.street,
        municipality=party.municipality,
        postcode=party.postcode,
        country=party.country_code,
    )


def _build_event(payload: EventPayload) -> ShipmentEvent:
    return ShipmentEvent(
        date=payload.date,
        time=payload.time,
        location=payload.location.location_name,
        description=payload.description,
        irregularity=payload.irregularity,
    )
