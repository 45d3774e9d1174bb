# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from shiptrack.app import build_dispatcher, track_shipment
from shiptrack.config import configure_logging
from shiptrack.domain.errors import TrackingError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from types import FrameType

    from shiptrack.domain.model import Address, ShipmentEvent, ShipmentRecord

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track shipments and store their history")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    track = subparsers.add_parser("track", help="Fetch and reconcile one shipment")
    track.add_argument(
        "--carrier",
        type=str,
        required=True,
        help="Carrier name, e.g. bpost",
    )
    track.add_argument(
        "--tracking-number",
        type=str,
        required=True,
        help="Carrier tracking number of the parcel",
    )
    track.add_argument(
        "--postcode",
        type=str,
        help="Postcode of the sender or receiver (required by some carriers)",
    )
    track.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy database URI (defaults to DATABASE_URI or the local data dir)",
    )

    subparsers.add_parser("carriers", help="List supported carriers")

    return parser.parse_args(list(argv))


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _address_to_dict(address: Address) -> dict[str, str]:
    return {
        "name": address.name,
        "street": address.street,
        "municipality": address.municipality,
        "postcode": address.postcode,
        "country": address.country,
    }


def _event_to_dict(event: ShipmentEvent) -> dict[str, Any]:
    return {
        "date": event.date,
        "time": event.time,
        "location": event.location,
        "description": event.description,
        "irregularity": event.irregularity,
        "recorded_at": _isoformat(event.recorded_at),
    }


def record_to_dict(record: ShipmentRecord) -> dict[str, Any]:
    """Render a reconciled record as JSON-compatible data."""

    return {
        "id": str(record.id) if record.id is not None else None,
        "tracking_number": record.tracking_number,
        "carrier": record.carrier,
        "status": record.status,
        "sender": _address_to_dict(record.sender),
        "destination": _address_to_dict(record.destination),
        "events": [_event_to_dict(event) for event in record.events],
        "created_at": _isoformat(record.created_at),
        "updated_at": _isoformat(record.updated_at),
    }


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "carriers":
            for carrier in build_dispatcher().supported_carriers():
                print(carrier)
        elif parsed_args.command == "track":
            records = track_shipment(
                parsed_args.carrier,
                parsed_args.tracking_number,
                parsed_args.postcode,
                database_uri=parsed_args.database_uri,
            )
            print(json.dumps([record_to_dict(record) for record in records], indent=2))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")

    except TrackingError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception as exc:
        log.exception("Fatal error during tracking")
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point: load `.env`, trap Ctrl+C, then run the CLI."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
