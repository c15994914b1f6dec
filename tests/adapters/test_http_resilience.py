from __future__ import annotations

import asyncio

import httpx
from hishel.httpx import AsyncCacheClient

from lensindex.adapters.http_resilience import ResilientClient, build_retry
from lensindex.config import CacheConfig, ResilienceConfig, RetryPolicy


def test_client_uses_memory_cache_only_when_configured() -> None:
    cached = ResilientClient(ResilienceConfig(name="cached", cache=CacheConfig(ttl_seconds=60)))
    plain = ResilientClient(ResilienceConfig(name="plain"))

    try:
        assert isinstance(cached._client, AsyncCacheClient)  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        assert not isinstance(plain._client, AsyncCacheClient)  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        assert isinstance(plain._client, httpx.AsyncClient)  # noqa: SLF001  # type: ignore[reportPrivateUsage]
    finally:
        asyncio.run(cached.aclose())
        asyncio.run(plain.aclose())


def test_build_retry_carries_policy() -> None:
    retry = build_retry(RetryPolicy(total=3))

    assert retry.total == 3
