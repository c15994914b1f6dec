"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from lensindex.adapters.ipfs import IpfsMetadataFetcher
from lensindex.adapters.lens import JsonlLogSource
from lensindex.adapters.sepana import SepanaClient
from lensindex.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyLensUnitOfWork,
    is_started,
    startup,
)
from lensindex.config import get_sepana_config, get_sync_config
from lensindex.domain.data_integration import IndexTarget, SyncLensEventsResult, sync_lens_events
from lensindex.domain.ports.unit_of_work import LensUnitOfWork

if TYPE_CHECKING:
    from pathlib import Path

    from lensindex.domain.ports.fetching import LensEventSource, MetadataFetcher
    from lensindex.domain.ports.indexing import SearchIndex

UnitOfWorkFactory = Callable[[], LensUnitOfWork]


log = getLogger(__name__)


def build_index_target(
    *,
    fetch_metadata: MetadataFetcher | None = None,
    search_index: SearchIndex | None = None,
) -> IndexTarget:
    """Build the metadata/search-index pair; fails fast on missing Sepana settings."""

    sepana_config = get_sepana_config()
    return IndexTarget(
        fetch_metadata=fetch_metadata or IpfsMetadataFetcher(),
        search_index=search_index or SepanaClient(config=sepana_config),
        engine_id=sepana_config.engine_id,
    )


def index_lens_logs(
    *,
    logs_path: Path | None = None,
    source: LensEventSource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    index_target: IndexTarget | None = None,
    skip_index: bool = False,
    batch_size: int | None = None,
) -> SyncLensEventsResult:
    """Reconcile Lens hub logs into the database and index post/comment metadata."""

    if source is None and logs_path is None:
        raise ValueError("Either logs_path or source is required")

    effective_target = None if skip_index else (index_target or build_index_target())
    effective_source = source or JsonlLogSource(path=logs_path)  # type: ignore[arg-type]
    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyLensUnitOfWork
    effective_batch_size = batch_size or get_sync_config().log_batch_size

    log.info(
        "Starting Lens indexing: batch_size=%s, index=%s",
        effective_batch_size,
        effective_target is not None,
    )

    result = sync_lens_events(
        source=effective_source,
        unit_of_work_factory=unit_of_work_factory,
        index_target=effective_target,
        batch_size=effective_batch_size,
    )

    log.info(
        f"Finished Lens indexing: batches={result.batches}, events={result.events}, "
        f"dropped={result.dropped}, new_entities={result.created}, indexed={result.indexed}"
    )

    return result
