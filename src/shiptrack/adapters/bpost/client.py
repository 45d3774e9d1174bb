"""HTTP gateway for the Bpost track-and-trace API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from shiptrack.adapters.http_resilience import ResilienceConfig, ResilientClient
from shiptrack.config.bpost import BpostConfig, get_bpost_config

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class BpostGateway:
    """Fetch raw tracking payloads for one item identifier (plus postal code)."""

    config: BpostConfig = field(default_factory=get_bpost_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def fetch(self, tracking_number: str, auxiliary_code: str | None = None) -> str:
        return asyncio.run(self._fetch_async(tracking_number, auxiliary_code))

    async def _fetch_async(self, tracking_number: str, postal_code: str | None) -> str:
        params: dict[str, str] = {"itemIdentifier": tracking_number}
        if postal_code:
            params["postalCode"] = postal_code

        log.info("Fetching Bpost tracking data for %s", tracking_number)
        async with self.client_factory(self.config.resilience) as client:
            response = await client.get(self.config.base_url, params=httpx.QueryParams(params))
            response.raise_for_status()
            return response.text


if TYPE_CHECKING:
    from shiptrack.domain.ports import CarrierGateway

    _gateway_check: CarrierGateway = BpostGateway()
