"""Application services for tracking shipments through a carrier pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from shiptrack.domain.errors import RequestValidationError
from shiptrack.domain.reconciliation import ReconciliationEngine

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from shiptrack.domain.model import ShipmentRecord, ShipmentSnapshot
    from shiptrack.domain.ports import CarrierGateway, ShipmentUnitOfWork

type SnapshotParser = Callable[[str], Sequence[ShipmentSnapshot]]
type UnitOfWorkFactory = Callable[[], ShipmentUnitOfWork]

log = getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


@dataclass(frozen=True, slots=True)
class TrackingRequest:
    """Inbound request to track one parcel."""

    tracking_number: str | None
    auxiliary_code: str | None = None

    def validate(
        self,
        *,
        requires_auxiliary_code: bool,
        auxiliary_code_label: str = "Postcode",
    ) -> None:
        """Raise ``RequestValidationError`` when a required field is missing or blank."""

        if _is_blank(self.tracking_number):
            raise RequestValidationError(
                "Tracking number is required", field_name="tracking_number"
            )
        if requires_auxiliary_code and _is_blank(self.auxiliary_code):
            raise RequestValidationError(
                f"{auxiliary_code_label} is required", field_name="auxiliary_code"
            )


@runtime_checkable
class TrackingPipeline(Protocol):
    """Carrier-specific validation, gateway call, parsing and reconciliation."""

    @property
    def carrier_name(self) -> str: ...

    @property
    def requires_auxiliary_code(self) -> bool: ...

    def supports(self, carrier: str | None) -> bool: ...

    def track(self, request: TrackingRequest) -> list[ShipmentRecord]: ...


@dataclass(slots=True)
class CarrierPipeline:
    """Default pipeline: validate, fetch, parse, then reconcile snapshot by snapshot.

    Each reconciled snapshot is committed on its own. When the store fails on a
    later snapshot the earlier commits stay in place and the remaining snapshots
    are not processed.
    """

    carrier_name: str
    gateway: CarrierGateway
    parser: SnapshotParser
    unit_of_work_factory: UnitOfWorkFactory
    requires_auxiliary_code: bool = False
    auxiliary_code_label: str = "Postcode"

    def supports(self, carrier: str | None) -> bool:
        if carrier is None:
            return False
        return carrier.strip().casefold() == self.carrier_name.strip().casefold()

    def track(self, request: TrackingRequest) -> list[ShipmentRecord]:
        try:
            request.validate(
                requires_auxiliary_code=self.requires_auxiliary_code,
                auxiliary_code_label=self.auxiliary_code_label,
            )
        except RequestValidationError as exc:
            log.warning("Rejected %s tracking request: %s", self.carrier_name, exc)
            raise

        tracking_number = request.tracking_number or ""
        log.info("Tracking %s shipment %s", self.carrier_name, tracking_number)
        payload = self.gateway.fetch(tracking_number, request.auxiliary_code)
        snapshots = self.parser(payload)
        if not snapshots:
            log.info("No %s shipments reported for %s", self.carrier_name, tracking_number)
            return []

        records: list[ShipmentRecord] = []
        with self.unit_of_work_factory() as uow:
            engine = ReconciliationEngine(uow.repositories.shipments)
            for snapshot in snapshots:
                records.append(engine.reconcile(snapshot))
                uow.commit()

        log.info(
            "Finished %s tracking for %s: snapshots=%s, writes=%s",
            self.carrier_name,
            tracking_number,
            len(snapshots),
            engine.writes,
        )
        return records


if TYPE_CHECKING:
    _pipeline_check: type[TrackingPipeline] = CarrierPipeline
