from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import event

from shiptrack.adapters.bpost import parse_tracking_response
from shiptrack.domain.tracking import CarrierPipeline, TrackingRequest
from tests.helpers.shipments import FakeGateway, event_payload, item_payload, tracking_payload

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy.engine import Engine

    from shiptrack.adapters.sqlalchemy.unit_of_work import SqlAlchemyShipmentUnitOfWork

PREPARED = "Confirmation of preparation of the shipment received"
DELIVERED = "Package delivered"


def _pipeline(
    payload: str,
    unit_of_work_factory: Callable[[], SqlAlchemyShipmentUnitOfWork],
) -> CarrierPipeline:
    return CarrierPipeline(
        carrier_name="Bpost",
        gateway=FakeGateway(payload),
        parser=parse_tracking_response,
        unit_of_work_factory=unit_of_work_factory,
        requires_auxiliary_code=True,
    )


def _first_payload() -> str:
    return tracking_payload(
        item_payload(
            "X1",
            events=[event_payload(PREPARED, date="2023-12-01", time="10:00:00")],
        )
    )


def _second_payload() -> str:
    return tracking_payload(
        item_payload(
            "X1",
            events=[
                event_payload(DELIVERED, date="2023-12-02", time="15:00:00"),
                event_payload(PREPARED, date="2023-12-01", time="10:00:00"),
            ],
        )
    )


def test_first_sync_inserts_record(
    sqlite_unit_of_work: Callable[[], SqlAlchemyShipmentUnitOfWork],
) -> None:
    (record,) = _pipeline(_first_payload(), sqlite_unit_of_work).track(
        TrackingRequest("X1", "1000")
    )

    assert record.status == PREPARED
    assert len(record.events) == 1
    assert record.id is not None


def test_follow_up_sync_appends_new_event_and_updates_status(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyShipmentUnitOfWork],
) -> None:
    _pipeline(_first_payload(), sqlite_unit_of_work).track(TrackingRequest("X1", "1000"))
    first_seen = _stored_updated_at(sqlite_unit_of_work)

    with _recorded_statements(sqlite_engine) as statements:
        (record,) = _pipeline(_second_payload(), sqlite_unit_of_work).track(
            TrackingRequest("X1", "1000")
        )

    writes = _writes(statements)
    assert len([s for s in writes if s.startswith("UPDATE shipment_record")]) == 1
    assert len([s for s in writes if s.startswith("INSERT INTO shipment_event")]) == 1
    assert len(writes) == 2
    assert record.status == DELIVERED
    assert [scan.description for scan in record.events] == [PREPARED, DELIVERED]
    assert _stored_updated_at(sqlite_unit_of_work) != first_seen
    with sqlite_unit_of_work() as uow:
        stored = uow.repositories.shipments.find_by_tracking_number("X1")
        assert stored is not None
        assert [scan.description for scan in stored.events] == [PREPARED, DELIVERED]


def test_repeated_sync_writes_nothing(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyShipmentUnitOfWork],
) -> None:
    _pipeline(_first_payload(), sqlite_unit_of_work).track(TrackingRequest("X1", "1000"))
    first_seen = _stored_updated_at(sqlite_unit_of_work)

    with _recorded_statements(sqlite_engine) as statements:
        (record,) = _pipeline(_first_payload(), sqlite_unit_of_work).track(
            TrackingRequest("X1", "1000")
        )

    assert _writes(statements) == []
    assert record.status == PREPARED
    assert len(record.events) == 1
    assert _stored_updated_at(sqlite_unit_of_work) == first_seen


def test_empty_items_store_nothing(
    sqlite_unit_of_work: Callable[[], SqlAlchemyShipmentUnitOfWork],
) -> None:
    records = _pipeline('{"items": []}', sqlite_unit_of_work).track(
        TrackingRequest("X1", "1000")
    )

    assert records == []
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.shipments.find_by_tracking_number("X1") is None


def _stored_updated_at(
    unit_of_work_factory: Callable[[], SqlAlchemyShipmentUnitOfWork],
) -> object:
    with unit_of_work_factory() as uow:
        stored = uow.repositories.shipments.find_by_tracking_number("X1")
        assert stored is not None
        return stored.updated_at


@contextmanager
def _recorded_statements(engine: Engine) -> Iterator[list[str]]:
    statements: list[str] = []

    def record_statement(*args: object) -> None:
        statements.append(str(args[2]))

    event.listen(engine, "before_cursor_execute", record_statement)
    try:
        yield statements
    finally:
        event.remove(engine, "before_cursor_execute", record_statement)


def _writes(statements: list[str]) -> list[str]:
    normalized = (" ".join(s.split()) for s in statements)
    return [s for s in normalized if s.upper().startswith(("INSERT", "UPDATE", "DELETE"))]
