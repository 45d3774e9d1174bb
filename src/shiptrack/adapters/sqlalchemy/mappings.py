"""SQLAlchemy mapping metadata for the shipment domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    Integer,
    String,
    Table,
    TypeDecorator,
    Uuid,
    orm,
)
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import composite, configure_mappers, relationship

from shiptrack.domain.model import Address, ShipmentEvent, ShipmentRecord

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _address_columns(prefix: str) -> list[Column[str]]:
    return [
        Column(f"{prefix}_name", String, nullable=False, default=""),
        Column(f"{prefix}_street", String, nullable=False, default=""),
        Column(f"{prefix}_municipality", String, nullable=False, default=""),
        Column(f"{prefix}_postcode", String, nullable=False, default=""),
        Column(f"{prefix}_country", String, nullable=False, default=""),
    ]


shipment_record_table = Table(
    "shipment_record",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("tracking_number", String, nullable=False, unique=True),
    Column("carrier", String, nullable=False),
    Column("status", String, nullable=True),
    *_address_columns("sender"),
    *_address_columns("destination"),
    Column("created_at", UTCDateTime(), nullable=True),
    Column("updated_at", UTCDateTime(), nullable=True),
)

shipment_event_table = Table(
    "shipment_event",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "record_id",
        UUIDColumnType,
        ForeignKey("shipment_record.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("position", Integer, nullable=False),
    Column("date", String, nullable=False, default=""),
    Column("time", String, nullable=False, default=""),
    Column("location", String, nullable=False, default=""),
    Column("description", String, nullable=False, default=""),
    Column("irregularity", Boolean, nullable=False, default=False),
    Column("recorded_at", UTCDateTime(), nullable=True),
)


def _address_composite(prefix: str) -> orm.Composite[Address]:
    columns = shipment_record_table.c
    return composite(
        Address,
        columns[f"{prefix}_name"],
        columns[f"{prefix}_street"],
        columns[f"{prefix}_municipality"],
        columns[f"{prefix}_postcode"],
        columns[f"{prefix}_country"],
    )


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(ShipmentEvent, shipment_event_table)

    mapper_registry.map_imperatively(
        ShipmentRecord,
        shipment_record_table,
        properties={
            "sender": _address_composite("sender"),
            "destination": _address_composite("destination"),
            "_events": relationship(
                ShipmentEvent,
                order_by=shipment_event_table.c.position,
                collection_class=ordering_list("position"),
                cascade="all, delete-orphan",
            ),
        },
    )

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
