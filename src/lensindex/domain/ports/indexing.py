"""Port for pushing documents to a search index."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lensindex.domain.ports.fetching import MetadataDocument


@runtime_checkable
class SearchIndex(Protocol):
    def insert(self, engine_id: str, documents: Sequence[MetadataDocument]) -> None: ...
