"""Metadata fetcher resolving content URIs through an IPFS gateway or plain HTTP."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

import httpx

from lensindex.adapters.http_resilience import ResilienceConfig, ResilientClient
from lensindex.config.ipfs import IpfsConfig, get_ipfs_config
from lensindex.domain.content import ContentSource, resolve_content_uri
from lensindex.domain.ports.fetching import MetadataFetcher

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from lensindex.domain.content import ContentLocation
    from lensindex.domain.ports.fetching import MetadataDocument, MetadataRequest

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class IpfsMetadataFetcher:
    """Fetch metadata documents in fixed-size batches.

    Items of one batch are fetched concurrently, batches run one after another.
    Direct HTTP failures yield ``None`` for that item; gateway failures and
    unexpected URI shapes propagate and abort the whole call.
    """

    config: IpfsConfig = field(default_factory=get_ipfs_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, items: Sequence[MetadataRequest]) -> list[MetadataDocument | None]:
        if not items:
            return []
        return asyncio.run(self._fetch_all_async(items))

    async def _fetch_all_async(
        self, items: Sequence[MetadataRequest]
    ) -> list[MetadataDocument | None]:
        # resolve every URI up front so a malformed one fails before any request
        locations = [resolve_content_uri(item.content_uri) for item in items]
        documents: list[MetadataDocument | None] = []
        async with (
            self.client_factory(self.config.gateway) as gateway,
            self.client_factory(self.config.direct) as direct,
        ):
            batch_size = self.config.batch_size
            for offset in range(0, len(items), batch_size):
                batch = zip(
                    items[offset : offset + batch_size],
                    locations[offset : offset + batch_size],
                    strict=True,
                )
                try:
                    async with asyncio.TaskGroup() as group:
                        tasks = [
                            group.create_task(
                                self._fetch_one(item, location, gateway=gateway, direct=direct)
                            )
                            for item, location in batch
                        ]
                except ExceptionGroup as failures:
                    # siblings are cancelled; surface the first failure itself
                    raise failures.exceptions[0] from failures
                documents.extend(task.result() for task in tasks)
        return documents

    async def _fetch_one(
        self,
        item: MetadataRequest,
        location: ContentLocation | None,
        *,
        gateway: ResilientClient,
        direct: ResilientClient,
    ) -> MetadataDocument | None:
        if location is None:
            return None
        if location.source is ContentSource.GATEWAY:
            payload = await _get_json(gateway, location.target)
        else:
            try:
                payload = await _get_json(direct, location.target)
            except (httpx.HTTPError, ValueError) as exc:
                log.warning(f"Metadata fetch failed for {item.id} from {location.target}: {exc}")
                return None
        if not isinstance(payload, Mapping):
            log.warning(f"Ignoring non-object metadata for {item.id} from {location.target}")
            return None
        return {"_id": item.id, **cast(Mapping[str, Any], payload)}


async def _get_json(client: ResilientClient, url: str) -> object:
    response = await client.get(url)
    response.raise_for_status()
    return response.json()


if TYPE_CHECKING:
    _fetcher_check: MetadataFetcher = IpfsMetadataFetcher()
