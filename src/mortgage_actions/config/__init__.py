"""Application configuration helpers."""

from __future__ import annotations

from mortgage_actions.common.logging import configure_logging

from .env import (
    optional_env_var,
    optional_float_env_var,
    optional_int_env_var,
    require_any_env_var,
)
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .pipeline import get_pipeline_config
from .places import PlacesConfig, get_places_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "PlacesConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_pipeline_config",
    "get_places_config",
    "get_storage_config",
    "optional_env_var",
    "optional_float_env_var",
    "optional_int_env_var",
    "require_any_env_var",
]
