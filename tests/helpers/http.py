"""Mock-transport client factories for adapter tests."""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING

import httpx

from lensindex.adapters.http_resilience import ResilienceConfig, ResilientClient

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


def make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]],
    *,
    created: list[ResilienceConfig] | None = None,
) -> Callable[[ResilienceConfig], ResilientClient]:
    """Build ``ResilientClient`` instances whose requests are answered by ``handler``."""

    async def async_handler(request: httpx.Request) -> httpx.Response:
        response = handler(request)
        if inspect.isawaitable(response):
            return await response
        return response

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        if created is not None:
            created.append(resilience)
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            transport=httpx.MockTransport(async_handler),
            base_url=resilience.base_url or "",
            headers=dict(resilience.default_headers or {}),
        )
        return client

    return factory
