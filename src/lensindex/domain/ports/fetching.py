"""Ports for fetching external domain data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from lensindex.domain.events import EventBatch


@runtime_checkable
class LensEventSource(Protocol):
    """Callable port yielding decoded event batches in log order."""

    def __call__(self, *, batch_size: int) -> Iterable[EventBatch]: ...


@dataclass(frozen=True, slots=True)
class MetadataRequest:
    """An entity whose off-chain metadata should be resolved."""

    id: str
    content_uri: str | None


type MetadataDocument = dict[str, Any]


@runtime_checkable
class MetadataFetcher(Protocol):
    """Resolve metadata for each request; the result list is aligned with the input."""

    def __call__(self, items: Sequence[MetadataRequest]) -> list[MetadataDocument | None]: ...


__all__ = ["LensEventSource", "MetadataDocument", "MetadataFetcher", "MetadataRequest"]
