"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, cast

from sqlalchemy import select

from shiptrack.adapters.sqlalchemy.mappings import shipment_record_table
from shiptrack.domain.model import ShipmentRecord, new_id

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class SqlAlchemyShipmentRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_tracking_number(self, tracking_number: str) -> ShipmentRecord | None:
        stmt = select(ShipmentRecord).where(
            shipment_record_table.c.tracking_number == tracking_number
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def save(self, record: ShipmentRecord) -> ShipmentRecord:
        now = datetime.now(UTC)
        if record.id is None:
            record.id = new_id()
        if record.created_at is None:
            record.created_at = now
        record.updated_at = now
        for event in record.events:
            if event.recorded_at is None:
                event.recorded_at = now
        self.session.add(record)
        self.session.flush()
        return record


if TYPE_CHECKING:
    from shiptrack.domain.ports.persistence import ShipmentRepository

    _session_stub = cast("Session", object())
    _repo_check: ShipmentRepository = SqlAlchemyShipmentRepository(_session_stub)
