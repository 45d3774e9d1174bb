"""Transaction boundary around the shipment repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from shiptrack.domain.ports.persistence import ShipmentRepository


@runtime_checkable
class UnitOfWork[TRepositories](Protocol):
    """Context manager exposing repositories that share one transaction.

    Leaving the block with an exception rolls back whatever was not committed.
    """

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(frozen=True, slots=True)
class ShipmentRepositories:
    shipments: ShipmentRepository


type ShipmentUnitOfWork = UnitOfWork[ShipmentRepositories]
