"""Application services for indexing Lens hub events."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from lensindex.config.sync import DEFAULT_LOG_BATCH_SIZE
from lensindex.domain.ports.fetching import MetadataRequest
from lensindex.domain.reconciliation import LensReconciler, ReconciledEntities

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from lensindex.domain.events import EventBatch
    from lensindex.domain.model import Comment, Post
    from lensindex.domain.ports.fetching import LensEventSource, MetadataDocument, MetadataFetcher
    from lensindex.domain.ports.indexing import SearchIndex
    from lensindex.domain.ports.unit_of_work import LensUnitOfWork

log = getLogger(__name__)


@dataclass(slots=True)
class IndexResult:
    posts_indexed: int = 0
    comments_indexed: int = 0


@dataclass(slots=True)
class SyncLensEventsResult:
    """Outcome of a Lens indexing run."""

    batches: int = 0
    events: int = 0
    dropped: int = 0
    profiles: int = 0
    posts: int = 0
    comments: int = 0
    created: int = 0
    indexed: int = 0


@dataclass(frozen=True, slots=True)
class IndexTarget:
    """Search index and the metadata fetcher feeding it."""

    fetch_metadata: MetadataFetcher
    search_index: SearchIndex
    engine_id: str


def reconcile_batch(
    batch: EventBatch,
    *,
    unit_of_work_factory: Callable[[], LensUnitOfWork],
    reconciler: LensReconciler | None = None,
) -> ReconciledEntities:
    """Reconcile and commit one batch; nothing is committed if any step fails."""

    active_reconciler = reconciler or LensReconciler()
    with unit_of_work_factory() as uow:
        entities = active_reconciler(batch, repositories=uow.repositories)
        uow.commit()
    return entities


def index_lens_data(
    entities: ReconciledEntities,
    *,
    fetch_metadata: MetadataFetcher,
    search_index: SearchIndex,
    engine_id: str,
) -> IndexResult:
    """Resolve post and comment metadata and push the resolved documents."""

    result = IndexResult()
    result.posts_indexed = _index_items(
        "posts", entities.posts, fetch_metadata, search_index, engine_id
    )
    result.comments_indexed = _index_items(
        "comments", entities.comments, fetch_metadata, search_index, engine_id
    )
    return result


def _index_items(
    label: str,
    items: Sequence[Post | Comment],
    fetch_metadata: MetadataFetcher,
    search_index: SearchIndex,
    engine_id: str,
) -> int:
    log.debug(f"Fetching metadata for {len(items)} {label}...")
    requests = [MetadataRequest(id=item.id, content_uri=item.content_uri) for item in items]
    documents: list[MetadataDocument] = [
        document for document in fetch_metadata(requests) if document is not None
    ]
    log.debug(f"Saving metadata for {len(documents)} {label}...")
    search_index.insert(engine_id, documents)
    return len(documents)


def sync_lens_events(
    *,
    source: LensEventSource,
    unit_of_work_factory: Callable[[], LensUnitOfWork],
    index_target: IndexTarget | None = None,
    batch_size: int = DEFAULT_LOG_BATCH_SIZE,
    reconciler: LensReconciler | None = None,
) -> SyncLensEventsResult:
    """Process event batches strictly in order: reconcile, commit, then index.

    Any exception aborts the run after the last committed batch. Passing no
    ``index_target`` only maintains the entity graph.
    """

    active_reconciler = reconciler or LensReconciler()
    result = SyncLensEventsResult()

    for batch in source(batch_size=batch_size):
        result.batches += 1
        result.events += len(batch)
        result.dropped += batch.dropped
        if not len(batch):
            continue

        entities = reconcile_batch(
            batch,
            unit_of_work_factory=unit_of_work_factory,
            reconciler=active_reconciler,
        )
        result.profiles += len(entities.profiles)
        result.posts += len(entities.posts)
        result.comments += len(entities.comments)
        result.created += entities.created
        log.info(
            "Batch %s reconciled: events=%s, dropped=%s, new_entities=%s",
            result.batches,
            len(batch),
            batch.dropped,
            entities.created,
        )

        if index_target is not None:
            indexed = index_lens_data(
                entities,
                fetch_metadata=index_target.fetch_metadata,
                search_index=index_target.search_index,
                engine_id=index_target.engine_id,
            )
            result.indexed += indexed.posts_indexed + indexed.comments_indexed

    return result
