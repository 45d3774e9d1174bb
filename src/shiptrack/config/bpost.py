"""Bpost configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int, env_str
from .errors import ConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy

BPOST_CARRIER_NAME = "Bpost"
DEFAULT_BPOST_BASE_URL = "https://track.bpost.cloud/track/items"
DEFAULT_BPOST_TIMEOUT_SECONDS = 10.0
DEFAULT_BPOST_RETRIES = 3


@dataclass(frozen=True, slots=True)
class BpostConfig:
    """Holds Bpost tracking API configuration values."""

    base_url: str
    resilience: ResilienceConfig


def get_bpost_config(*, resilience: ResilienceConfig | None = None) -> BpostConfig:
    base_url = env_str("BPOST_BASE_URL", DEFAULT_BPOST_BASE_URL)
    if resilience is None:
        timeout = env_float("BPOST_TIMEOUT_SECONDS", DEFAULT_BPOST_TIMEOUT_SECONDS)
        retries = env_int("BPOST_RETRIES", DEFAULT_BPOST_RETRIES)
        if timeout <= 0:
            raise ConfigurationError("BPOST_TIMEOUT_SECONDS must be positive")
        if retries < 0:
            raise ConfigurationError("BPOST_RETRIES must be non-negative")
        resilience = ResilienceConfig(
            name="bpost",
            base_url=base_url,
            timeout_seconds=timeout,
            retry=RetryPolicy(total=retries),
            default_headers={"Accept": "application/json"},
        )
    return BpostConfig(base_url=base_url, resilience=resilience)
