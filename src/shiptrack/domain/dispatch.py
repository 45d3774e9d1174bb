"""Carrier dispatch: pick the tracking pipeline responsible for a carrier."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from shiptrack.domain.errors import UnsupportedCarrierError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shiptrack.domain.model import ShipmentRecord
    from shiptrack.domain.tracking import TrackingPipeline, TrackingRequest

log = getLogger(__name__)


@dataclass(slots=True)
class CarrierDispatcher:
    """Ordered pipeline registry; the first pipeline that supports a carrier wins."""

    _pipelines: list[TrackingPipeline] = field(default_factory=list["TrackingPipeline"])

    @classmethod
    def from_pipelines(cls, pipelines: Iterable[TrackingPipeline]) -> CarrierDispatcher:
        return cls(_pipelines=list(pipelines))

    @property
    def pipelines(self) -> tuple[TrackingPipeline, ...]:
        return tuple(self._pipelines)

    def register(self, pipeline: TrackingPipeline) -> None:
        self._pipelines.append(pipeline)

    def supported_carriers(self) -> list[str]:
        return [pipeline.carrier_name for pipeline in self._pipelines]

    def select(self, carrier: str | None) -> TrackingPipeline:
        for pipeline in self._pipelines:
            if pipeline.supports(carrier):
                return pipeline
        log.warning("No tracking pipeline registered for carrier %r", carrier)
        raise UnsupportedCarrierError(carrier)

    def track(self, carrier: str | None, request: TrackingRequest) -> list[ShipmentRecord]:
        return self.select(carrier).track(request)
