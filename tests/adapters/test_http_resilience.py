from __future__ import annotations

import asyncio
from pathlib import Path  # noqa: TC003

import httpx
import pytest
from hishel.httpx import AsyncCacheClient

from mortgage_actions.adapters.http_resilience import (
    ResilientClient,
    _JSONPredicateFilter,
    build_retry,
)
from mortgage_actions.config import (
    CacheConfig,
    ConfigurationError,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)


def test_build_retry_copies_policy() -> None:
    retry = build_retry(RetryPolicy(total=5, backoff_factor=0.1))

    assert retry.total == 5
    assert retry.backoff_factor == 0.1


def test_cache_backend_selects_hishel_client(tmp_path: Path) -> None:
    sqlite_config = ResilienceConfig(
        name="cached",
        cache=CacheConfig(backend="sqlite", sqlite_path=str(tmp_path / "cache.db")),
    )
    uncached_config = ResilienceConfig(name="plain", cache=None)

    cached = ResilientClient(sqlite_config)
    plain = ResilientClient(uncached_config)

    assert isinstance(cached._client, AsyncCacheClient)
    assert not isinstance(plain._client, AsyncCacheClient)
    asyncio.run(cached.aclose())
    asyncio.run(plain.aclose())


def test_unknown_cache_backend_is_a_configuration_error() -> None:
    cache = CacheConfig(backend="redis")  # type: ignore[arg-type]
    config = ResilienceConfig(name="bad", cache=cache)

    with pytest.raises(ConfigurationError):
        ResilientClient(config)


def test_requests_pass_through_rate_limiter() -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(200, json={"ok": True})

    client = ResilientClient(
        ResilienceConfig(name="limited", cache=None, ratelimit=RateLimit(5, 1.0))
    )
    client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

    async def scenario() -> list[int]:
        async with client:
            first = await client.request("GET", "https://example.test/a")
            second = await client.request("POST", "https://example.test/b", json={})
            return [first.status_code, second.status_code]

    assert asyncio.run(scenario()) == [200, 200]
    assert calls == ["/a", "/b"]


def test_cache_filter_skips_error_payloads() -> None:
    def without_error(payload: object) -> bool:
        return isinstance(payload, dict) and "error" not in payload

    cache_filter = _JSONPredicateFilter(without_error)

    assert cache_filter.apply(None, b'{"suggestions": []}')  # type: ignore[arg-type]
    assert not cache_filter.apply(None, b'{"error": {"code": 403}}')  # type: ignore[arg-type]
    assert not cache_filter.apply(None, b"not json")  # type: ignore[arg-type]
    assert not cache_filter.apply(None, None)  # type: ignore[arg-type]
