"""Errors raised by the tracking core.

Gateway (``httpx``) and store (``sqlalchemy``) failures are not wrapped; they
propagate to the caller unchanged.
"""

from __future__ import annotations


class TrackingError(RuntimeError):
    """Base class for errors raised while tracking a shipment."""


class RequestValidationError(TrackingError, ValueError):
    """Raised when a tracking request lacks a required field."""

    def __init__(self, message: str, *, field_name: str) -> None:
        super().__init__(message)
        self.field_name = field_name


class MalformedPayloadError(TrackingError):
    """Raised when a carrier response cannot be read as structured data."""


class UnsupportedCarrierError(TrackingError, LookupError):
    """Raised when no tracking pipeline handles the requested carrier."""

    def __init__(self, carrier: str | None) -> None:
        super().__init__(f"Unsupported carrier: {carrier}")
        self.carrier = carrier
