"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from shiptrack.adapters.bpost import BpostGateway, parse_tracking_response
from shiptrack.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyShipmentUnitOfWork,
    is_started,
    startup,
)
from shiptrack.config.bpost import BPOST_CARRIER_NAME
from shiptrack.domain.dispatch import CarrierDispatcher
from shiptrack.domain.tracking import CarrierPipeline, TrackingRequest

if TYPE_CHECKING:
    from shiptrack.domain.model import ShipmentRecord
    from shiptrack.domain.ports.fetching import CarrierGateway
    from shiptrack.domain.tracking import UnitOfWorkFactory


log = getLogger(__name__)


def build_bpost_pipeline(
    *,
    gateway: CarrierGateway | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> CarrierPipeline:
    """Wire the Bpost gateway, parser and store into a tracking pipeline."""

    return CarrierPipeline(
        carrier_name=BPOST_CARRIER_NAME,
        gateway=gateway or BpostGateway(),
        parser=parse_tracking_response,
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyShipmentUnitOfWork,
        requires_auxiliary_code=True,
        auxiliary_code_label="Postcode",
    )


def build_dispatcher(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> CarrierDispatcher:
    """Return a dispatcher with every carrier pipeline shiptrack ships with."""

    return CarrierDispatcher.from_pipelines(
        [build_bpost_pipeline(unit_of_work_factory=unit_of_work_factory)]
    )


def track_shipment(
    carrier: str | None,
    tracking_number: str | None,
    postcode: str | None = None,
    *,
    dispatcher: CarrierDispatcher | None = None,
    database_uri: str | None = None,
) -> list[ShipmentRecord]:
    """Track one parcel with the carrier's pipeline and return the reconciled records."""

    if dispatcher is None:
        if database_uri is not None:
            startup(database_uri=database_uri, force=True)
        elif not is_started():
            startup()
        dispatcher = build_dispatcher()

    log.info("Starting tracking sync: carrier=%s, tracking_number=%s", carrier, tracking_number)
    records = dispatcher.track(
        carrier,
        TrackingRequest(tracking_number=tracking_number, auxiliary_code=postcode),
    )
    log.info(f"Finished tracking sync: carrier={carrier}, records={len(records)}")
    return records
