"""Ports for fetching raw tracking data from carriers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CarrierGateway(Protocol):
    """Retrieve the raw tracking payload a carrier reports for one parcel.

    Transport failures are raised as-is; retries and timeouts are the gateway's
    own concern.
    """

    def fetch(self, tracking_number: str, auxiliary_code: str | None = None) -> str: ...


__all__ = ["CarrierGateway"]
