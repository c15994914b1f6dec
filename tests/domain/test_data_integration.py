from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from lensindex.domain.data_integration import (
    IndexTarget,
    index_lens_data,
    reconcile_batch,
    sync_lens_events,
)
from lensindex.domain.reconciliation import merge_batch
from tests.helpers.lens_events import (
    FakeEventSource,
    FakeMetadataFetcher,
    FakeSearchIndex,
    InMemoryStore,
    make_batch,
    make_comment_created,
    make_post_created,
    make_profile_created,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lensindex.domain.ports.fetching import MetadataDocument, MetadataRequest


def test_index_lens_data_indexes_posts_then_comments() -> None:
    entities = merge_batch(
        make_batch(
            make_profile_created(1),
            make_post_created(1, 1),
            make_comment_created(2, 1, pointed=(1, 1)),
        )
    )
    fetcher = FakeMetadataFetcher()
    index = FakeSearchIndex()

    result = index_lens_data(
        entities, fetch_metadata=fetcher, search_index=index, engine_id="engine-1"
    )

    assert [call[0].id for call in fetcher.calls] == ["1-1", "2-1"]
    assert [engine for engine, _ in index.inserts] == ["engine-1", "engine-1"]
    assert [document["_id"] for _, documents in index.inserts for document in documents] == [
        "1-1",
        "2-1",
        "2-1",
    ]
    assert result.posts_indexed == 2
    assert result.comments_indexed == 1


def test_index_lens_data_skips_absent_documents() -> None:
    entities = merge_batch(
        make_batch(make_post_created(1, 1), make_comment_created(2, 1, pointed=(3, 3)))
    )
    index = FakeSearchIndex()

    result = index_lens_data(
        entities,
        fetch_metadata=FakeMetadataFetcher(missing={"1-1"}),
        search_index=index,
        engine_id="engine-1",
    )

    # the pointed-to stub post has no content URI
    assert result.posts_indexed == 1
    assert result.comments_indexed == 1
    assert index.ids() == {"2-1": 2}


def test_reconcile_batch_commits_once() -> None:
    store = InMemoryStore()

    entities = reconcile_batch(
        make_batch(make_post_created(1, 1)), unit_of_work_factory=store.unit_of_work_factory()
    )

    assert store.commits == 1
    assert store.rollbacks == 0
    assert [post.id for post in entities.posts] == ["1-1"]
    assert set(store.posts.rows) == {"1-1"}


def test_reconcile_batch_rolls_back_on_failure() -> None:
    store = InMemoryStore()

    def failing_upsert(_entities: object) -> None:
        raise RuntimeError("database unavailable")

    store.posts.upsert_all = failing_upsert  # type: ignore[method-assign]

    with pytest.raises(RuntimeError, match="database unavailable"):
        reconcile_batch(
            make_batch(make_post_created(1, 1)), unit_of_work_factory=store.unit_of_work_factory()
        )

    assert store.commits == 0
    assert store.rollbacks == 1


def test_sync_lens_events_processes_batches_in_order() -> None:
    store = InMemoryStore()
    source = FakeEventSource(
        [
            make_batch(make_profile_created(1), make_post_created(1, 1), dropped=1),
            make_batch(dropped=2),
            make_batch(make_comment_created(2, 1, pointed=(1, 1))),
        ]
    )
    fetcher = FakeMetadataFetcher()
    index = FakeSearchIndex()

    result = sync_lens_events(
        source=source,
        unit_of_work_factory=store.unit_of_work_factory(),
        index_target=IndexTarget(fetch_metadata=fetcher, search_index=index, engine_id="e"),
        batch_size=10,
    )

    assert source.requested_batch_sizes == [10]
    assert result.batches == 3
    assert result.events == 3
    assert result.dropped == 3
    assert store.commits == 2
    # the last batch reuses the persisted profile and post and indexes them again
    assert result.created == 2 + 3
    assert index.ids() == {"1-1": 2, "2-1": 2}
    assert result.indexed == 4


def test_sync_lens_events_without_index_target_only_persists() -> None:
    store = InMemoryStore()

    result = sync_lens_events(
        source=FakeEventSource([make_batch(make_post_created(1, 1))]),
        unit_of_work_factory=store.unit_of_work_factory(),
        batch_size=5,
    )

    assert result.indexed == 0
    assert set(store.posts.rows) == {"1-1"}


def test_sync_lens_events_stops_at_failing_batch() -> None:
    store = InMemoryStore()
    index = FakeSearchIndex()

    class ExplodingFetcher(FakeMetadataFetcher):
        def __call__(self, items: Sequence[MetadataRequest]) -> list[MetadataDocument | None]:
            if any(item.id == "2-2" for item in items):
                raise ValueError("Unexpected url")
            return super().__call__(items)

    source = FakeEventSource(
        [
            make_batch(make_post_created(1, 1)),
            make_batch(make_post_created(2, 2)),
            make_batch(make_post_created(3, 3)),
        ]
    )

    with pytest.raises(ValueError, match="Unexpected url"):
        sync_lens_events(
            source=source,
            unit_of_work_factory=store.unit_of_work_factory(),
            index_target=IndexTarget(
                fetch_metadata=ExplodingFetcher(), search_index=index, engine_id="e"
            ),
            batch_size=1,
        )

    assert set(store.posts.rows) == {"1-1", "2-2"}
    assert index.ids() == {"1-1": 1}
