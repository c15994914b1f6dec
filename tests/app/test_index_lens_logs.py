from __future__ import annotations

import pytest

from lensindex import app as app_module
from lensindex.config import MissingConfigurationError
from lensindex.domain.data_integration import IndexTarget
from tests.helpers.lens_events import (
    FakeEventSource,
    FakeMetadataFetcher,
    FakeSearchIndex,
    InMemoryStore,
    make_batch,
    make_post_created,
)


def test_missing_sepana_configuration_fails_before_processing(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("SEPANA_API_KEY", raising=False)
    monkeypatch.delenv("SEPANA_ENGINE_ID", raising=False)
    store = InMemoryStore()
    source = FakeEventSource([make_batch(make_post_created(1, 1))])

    with pytest.raises(MissingConfigurationError):
        app_module.index_lens_logs(
            source=source, unit_of_work_factory=store.unit_of_work_factory()
        )

    assert source.requested_batch_sizes == []
    assert store.commits == 0


def test_build_index_target_uses_configured_engine(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEPANA_API_KEY", "key")
    monkeypatch.setenv("SEPANA_ENGINE_ID", "engine-7")
    index = FakeSearchIndex()

    target = app_module.build_index_target(
        fetch_metadata=FakeMetadataFetcher(), search_index=index
    )

    assert target.engine_id == "engine-7"
    assert target.search_index is index


def test_skip_index_needs_no_sepana_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SEPANA_API_KEY", raising=False)
    store = InMemoryStore()

    result = app_module.index_lens_logs(
        source=FakeEventSource([make_batch(make_post_created(1, 1))]),
        unit_of_work_factory=store.unit_of_work_factory(),
        skip_index=True,
        batch_size=10,
    )

    assert result.created == 2
    assert result.indexed == 0
    assert store.commits == 1


def test_index_lens_logs_uses_given_target() -> None:
    store = InMemoryStore()
    index = FakeSearchIndex()
    source = FakeEventSource([make_batch(make_post_created(1, 1))])

    result = app_module.index_lens_logs(
        source=source,
        unit_of_work_factory=store.unit_of_work_factory(),
        index_target=IndexTarget(
            fetch_metadata=FakeMetadataFetcher(), search_index=index, engine_id="e"
        ),
    )

    assert source.requested_batch_sizes == [1000]
    assert result.indexed == 1
    assert index.ids() == {"1-1": 1}


def test_index_lens_logs_requires_a_source() -> None:
    with pytest.raises(ValueError, match="logs_path or source"):
        app_module.index_lens_logs(skip_index=True)
