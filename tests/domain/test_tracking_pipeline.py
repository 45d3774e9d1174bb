from __future__ import annotations

import pytest

from shiptrack.adapters.bpost import parse_tracking_response
from shiptrack.domain.errors import MalformedPayloadError, RequestValidationError
from shiptrack.domain.tracking import CarrierPipeline, TrackingRequest
from tests.helpers.shipments import (
    FailingShipmentRepository,
    FakeGateway,
    FakeShipmentRepository,
    FakeShipmentUnitOfWork,
    event_payload,
    item_payload,
    tracking_payload,
)


def _pipeline(
    gateway: FakeGateway,
    uow: FakeShipmentUnitOfWork,
    *,
    requires_auxiliary_code: bool = True,
) -> CarrierPipeline:
    return CarrierPipeline(
        carrier_name="Bpost",
        gateway=gateway,
        parser=parse_tracking_response,
        unit_of_work_factory=lambda: uow,
        requires_auxiliary_code=requires_auxiliary_code,
    )


@pytest.mark.parametrize("tracking_number", [None, "", "   "])
def test_missing_tracking_number_is_rejected_before_gateway(
    tracking_number: str | None,
) -> None:
    gateway = FakeGateway(tracking_payload())
    uow = FakeShipmentUnitOfWork(FakeShipmentRepository())

    with pytest.raises(RequestValidationError, match="Tracking number is required") as exc:
        _pipeline(gateway, uow).track(TrackingRequest(tracking_number, "2000"))

    assert exc.value.field_name == "tracking_number"
    assert gateway.calls == []
    assert uow.entered == 0


@pytest.mark.parametrize("postcode", [None, "", "  "])
def test_missing_postcode_is_rejected_when_required(postcode: str | None) -> None:
    gateway = FakeGateway(tracking_payload())
    uow = FakeShipmentUnitOfWork(FakeShipmentRepository())

    with pytest.raises(RequestValidationError, match="Postcode is required"):
        _pipeline(gateway, uow).track(TrackingRequest("X1", postcode))

    assert gateway.calls == []


def test_postcode_is_optional_when_not_required() -> None:
    gateway = FakeGateway(tracking_payload())
    uow = FakeShipmentUnitOfWork(FakeShipmentRepository())

    _pipeline(gateway, uow, requires_auxiliary_code=False).track(TrackingRequest("X1"))

    assert gateway.calls == [("X1", None)]


def test_supports_matches_carrier_name_case_insensitively() -> None:
    pipeline = _pipeline(FakeGateway(), FakeShipmentUnitOfWork(FakeShipmentRepository()))

    assert pipeline.supports("bpost")
    assert pipeline.supports("  BPOST ")
    assert not pipeline.supports("postnl")
    assert not pipeline.supports(None)


def test_track_reconciles_every_item_and_commits_each() -> None:
    payload = tracking_payload(
        item_payload("X1", events=[event_payload("Delivered")]),
        item_payload("X2", events=[event_payload("Sorted")]),
    )
    repository = FakeShipmentRepository()
    uow = FakeShipmentUnitOfWork(repository)
    gateway = FakeGateway(payload)

    records = _pipeline(gateway, uow).track(TrackingRequest("X1", "2000"))

    assert [record.tracking_number for record in records] == ["X1", "X2"]
    assert gateway.calls == [("X1", "2000")]
    assert uow.commits == 2
    assert set(repository.records) == {"X1", "X2"}


def test_empty_items_touch_no_store() -> None:
    repository = FakeShipmentRepository()
    uow = FakeShipmentUnitOfWork(repository)

    records = _pipeline(FakeGateway('{"items": []}'), uow).track(TrackingRequest("X1", "2000"))

    assert records == []
    assert uow.entered == 0
    assert (repository.lookups, repository.saves) == (0, 0)


def test_malformed_payload_touches_no_store() -> None:
    repository = FakeShipmentRepository()
    uow = FakeShipmentUnitOfWork(repository)

    with pytest.raises(MalformedPayloadError):
        _pipeline(FakeGateway("<html>"), uow).track(TrackingRequest("X1", "2000"))

    assert uow.entered == 0
    assert (repository.lookups, repository.saves) == (0, 0)


def test_gateway_errors_propagate() -> None:
    uow = FakeShipmentUnitOfWork(FakeShipmentRepository())
    gateway = FakeGateway(error=ConnectionError("down"))

    with pytest.raises(ConnectionError):
        _pipeline(gateway, uow).track(TrackingRequest("X1", "2000"))

    assert uow.entered == 0


def test_store_failure_keeps_earlier_snapshots_committed() -> None:
    payload = tracking_payload(item_payload("X1"), item_payload("X2"), item_payload("X3"))
    repository = FailingShipmentRepository(fail_on_save=2)
    uow = FakeShipmentUnitOfWork(repository)

    with pytest.raises(RuntimeError, match="store unavailable"):
        _pipeline(FakeGateway(payload), uow).track(TrackingRequest("X1", "2000"))

    assert uow.commits == 1
    assert uow.rollback_called
    assert set(repository.records) == {"X1"}
    assert repository.lookups == 2


def test_second_identical_sync_is_idempotent() -> None:
    payload = tracking_payload(
        item_payload("X1", events=[event_payload("Delivered", time="12:00"), event_payload()])
    )
    repository = FakeShipmentRepository()
    uow = FakeShipmentUnitOfWork(repository)
    pipeline = _pipeline(FakeGateway(payload), uow)

    pipeline.track(TrackingRequest("X1", "2000"))
    (record,) = pipeline.track(TrackingRequest("X1", "2000"))

    assert repository.saves == 1
    assert len(record.events) == 2
