"""Application configuration helpers."""

from __future__ import annotations

from .bpost import BPOST_CARRIER_NAME, BpostConfig, get_bpost_config
from .env import env_float, env_int, env_str
from .errors import ConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "BPOST_CARRIER_NAME",
    "BpostConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "env_float",
    "env_int",
    "env_str",
    "get_bpost_config",
    "get_database_config",
    "get_storage_config",
]
