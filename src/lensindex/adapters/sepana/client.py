"""HTTP client for the Sepana search-index API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from lensindex.adapters.http_resilience import ResilienceConfig, ResilientClient
from lensindex.config.sepana import SepanaConfig, get_sepana_config
from lensindex.domain.ports.indexing import SearchIndex

from .schema import ErrorResponse, InsertDataRequest

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from lensindex.domain.ports.fetching import MetadataDocument

log = getLogger(__name__)

INSERT_DATA_PATH = "/v1/engine/insert_data"
SEPANA_BATCH_SIZE = 500


def split_into_batches[T](items: Sequence[T], max_batch_size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of at most ``max_batch_size`` items."""

    if max_batch_size <= 0:
        raise ValueError("max_batch_size must be positive")
    for offset in range(0, len(items), max_batch_size):
        yield list(items[offset : offset + max_batch_size])


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class SepanaAPIError(RuntimeError):
    """Raised when a Sepana insert request fails after transport retries."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class SepanaClient:
    config: SepanaConfig = field(default_factory=get_sepana_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    batch_size: int = SEPANA_BATCH_SIZE

    def insert(self, engine_id: str, documents: Sequence[MetadataDocument]) -> None:
        """Insert ``documents`` into the engine, one request per batch, in order."""

        if not documents:
            return
        asyncio.run(self._insert_async(engine_id, documents))

    async def _insert_async(self, engine_id: str, documents: Sequence[MetadataDocument]) -> None:
        async with self.client_factory(self._resilience()) as client:
            for batch in split_into_batches(documents, self.batch_size):
                payload = InsertDataRequest(engine_id=engine_id, docs=batch)
                await self._perform_request(client=client, payload=payload)

    def _resilience(self) -> ResilienceConfig:
        headers = dict(self.config.resilience.default_headers or {})
        headers["x-api-key"] = self.config.api_key
        return replace(self.config.resilience, default_headers=headers)

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        payload: InsertDataRequest,
    ) -> None:
        response = await client.post(
            INSERT_DATA_PATH,
            json=payload.model_dump(mode="json"),
            headers={"content-type": "application/json"},
        )
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = _error_message(response)
            log.error(f"Sepana insert of {len(payload.docs)} docs failed: {message}")
            raise SepanaAPIError(message, status_code=response.status_code) from exc
        log.debug(f"Inserted {len(payload.docs)} docs into engine {payload.engine_id}")


def _error_message(response: httpx.Response) -> str:
    try:
        error_payload = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return f"HTTP {response.status_code}"
    return error_payload.message or error_payload.error or f"HTTP {response.status_code}"


if TYPE_CHECKING:
    _index_check: SearchIndex = SepanaClient()
