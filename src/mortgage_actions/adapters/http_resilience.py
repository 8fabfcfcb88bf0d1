from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as HishelCacheResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from mortgage_actions.config.errors import ConfigurationError
from mortgage_actions.config.storage import get_storage_config

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from mortgage_actions.config.http_resilience import (
        CacheConfig,
        CachePredicate,
        ResilienceConfig,
        RetryPolicy,
    )

log = getLogger(__name__)


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        allowed_methods=tuple(policy.methods),
        status_forcelist=tuple(policy.statuses),
        retry_on_exceptions=policy.exceptions,
    )


class ResilientClient:
    """Async httpx client that retries, throttles and optionally caches lookups."""

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        limit = config.ratelimit
        self._limiter = AsyncLimiter(limit.max_calls, limit.per_seconds) if limit else None
        self._client = _build_client(config)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        json: object | None = None,
        params: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        if self._limiter is None:
            return await self._client.request(
                method, url, headers=headers, json=json, params=params
            )
        async with self._limiter:
            return await self._client.request(
                method, url, headers=headers, json=json, params=params
            )


def _build_client(config: ResilienceConfig) -> httpx.AsyncClient:
    transport = RetryTransport(retry=build_retry(config.retry))
    base_url = config.base_url or ""
    storage = _cache_storage(config.cache)
    if storage is None:
        return httpx.AsyncClient(
            base_url=base_url, timeout=config.timeout_seconds, transport=transport
        )

    policy = None
    if config.cache is not None and config.cache.should_cache is not None:
        policy = FilterPolicy(response_filters=[_JSONPredicateFilter(config.cache.should_cache)])
    log.debug(f"{config.name}: caching responses in {storage!r}")
    return AsyncCacheClient(
        base_url=base_url,
        timeout=config.timeout_seconds,
        transport=transport,
        storage=storage,
        policy=policy,
    )


def _cache_storage(config: CacheConfig | None) -> AsyncSqliteStorage | None:
    if config is None:
        return None
    if config.backend == "memory":
        database_path = ":memory:"
    elif config.backend == "sqlite":
        database_path = config.sqlite_path or str(get_storage_config().http_cache_path())
    else:
        raise ConfigurationError(f"Unsupported cache backend: {config.backend}")
    return AsyncSqliteStorage(database_path=database_path, default_ttl=config.ttl_seconds)


class _JSONPredicateFilter(BaseFilter[HishelCacheResponse]):
    """Only stores responses whose JSON body passes the configured predicate."""

    def __init__(self, predicate: CachePredicate) -> None:
        self._predicate = predicate

    def needs_body(self) -> bool:
        return True

    def apply(self, item: HishelCacheResponse, body: bytes | None) -> bool:  # noqa: ARG002
        if not body:
            return False
        try:
            payload = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError):
            return False
        return bool(self._predicate(payload))
