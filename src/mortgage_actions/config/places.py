"""Google Places (New) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_any_env_var
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .storage import get_storage_config

PLACES_BASE_URL = "https://places.googleapis.com/v1/"
PLACES_TIMEOUT_SECONDS = 10.0
PLACES_LANGUAGE_CODE = "en"
PLACES_API_KEY_VARS: tuple[str, ...] = ("GOOGLE_MAPS_API_KEY", "NEXT_GOOGLE_MAPS_API_KEY")
PLACES_CACHE_VAR = "MORTGAGE_ACTIONS_PLACES_CACHE"


@dataclass(frozen=True)
class PlacesConfig:
    """Holds Google Places API configuration values."""

    api_key: str
    resilience: ResilienceConfig
    language_code: str = PLACES_LANGUAGE_CODE


def is_cacheable_payload(payload: object) -> bool:
    """Cache successful Places payloads only, never error bodies."""

    return isinstance(payload, dict) and "error" not in payload


def _cache_config() -> CacheConfig | None:
    backend = (optional_env_var(PLACES_CACHE_VAR) or "memory").lower()
    if backend == "off":
        return None
    if backend == "memory":
        return CacheConfig(backend="memory", should_cache=is_cacheable_payload)
    if backend == "sqlite":
        path = get_storage_config().http_cache_path()
        return CacheConfig(
            backend="sqlite", sqlite_path=str(path), should_cache=is_cacheable_payload
        )
    raise ConfigurationError(
        f"{PLACES_CACHE_VAR} must be one of 'memory', 'sqlite' or 'off', got {backend!r}"
    )


def get_places_config(*, resilience: ResilienceConfig | None = None) -> PlacesConfig:
    """Build the Places config; raises ``MissingConfigurationError`` without an API key."""

    api_key = require_any_env_var(PLACES_API_KEY_VARS)
    return PlacesConfig(
        api_key=api_key,
        resilience=resilience
        or ResilienceConfig(
            name="google-places",
            base_url=PLACES_BASE_URL,
            timeout_seconds=PLACES_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=2),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            cache=_cache_config(),
        ),
    )
