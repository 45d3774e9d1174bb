"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import CarrierGateway
from .persistence import ShipmentRepository
from .unit_of_work import (
    ShipmentRepositories,
    ShipmentUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "CarrierGateway",
    "ShipmentRepositories",
    "ShipmentRepository",
    "ShipmentUnitOfWork",
    "UnitOfWork",
]
