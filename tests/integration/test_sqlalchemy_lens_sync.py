from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import pytest

from lensindex.adapters.ipfs import IpfsMetadataFetcher
from lensindex.adapters.lens import JsonlLogSource
from lensindex.adapters.sepana import SepanaClient
from lensindex.config import IpfsConfig, LensConfig, ResilienceConfig, SepanaConfig
from lensindex.domain.data_integration import IndexTarget, sync_lens_events
from tests.helpers.http import make_client_factory
from tests.helpers.lens_logs import LENS_HUB, OTHER_CONTRACT, make_record, write_jsonl

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from lensindex.adapters.sqlalchemy.unit_of_work import SqlAlchemyLensUnitOfWork


def _records() -> list[dict[str, Any]]:
    return [
        make_record(
            "ProfileCreated",
            {
                "profileId": 1,
                "to": "0x00000000000000000000000000000000000000aa",
                "handle": "alice.lens",
                "imageURI": "ipfs://QmAvatar",
                "timestamp": 1652700000,
            },
            log_index=0,
        ),
        make_record(
            "PostCreated",
            {"profileId": 1, "pubId": 1, "contentURI": "ipfs://QmPost", "timestamp": 1652700010},
            log_index=1,
        ),
        make_record(
            "PostCreated",
            {"profileId": 1, "pubId": 2, "contentURI": "ipfs://QmOther", "timestamp": 1652700011},
            address=OTHER_CONTRACT,
            log_index=2,
        ),
        make_record("PostCreated", {"profileId": "oops"}, log_index=3),
        make_record(
            "CommentCreated",
            {
                "profileId": 2,
                "pubId": 1,
                "profileIdPointed": 1,
                "pubIdPointed": 1,
                "contentURI": "https://meta.example/comment.json",
                "timestamp": 1652700020,
            },
            log_index=4,
        ),
    ]


@pytest.mark.integration
def test_sync_persists_graph_and_indexes_metadata(
    sqlite_unit_of_work: Callable[[], SqlAlchemyLensUnitOfWork],
    tmp_path: Path,
) -> None:
    inserted: list[dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "sepana.test":
            inserted.append(json.loads(request.content))
            return httpx.Response(200, json={})
        return httpx.Response(200, json={"source": request.url.path})

    factory = make_client_factory(handler)
    source = JsonlLogSource(
        path=write_jsonl(tmp_path / "logs.jsonl", _records()),
        lens=LensConfig(contract_address=LENS_HUB),
    )
    target = IndexTarget(
        fetch_metadata=IpfsMetadataFetcher(
            config=IpfsConfig(
                gateway=ResilienceConfig(name="gateway", base_url="https://gateway.test/"),
                direct=ResilienceConfig(name="direct"),
            ),
            client_factory=factory,
        ),
        search_index=SepanaClient(
            config=SepanaConfig(
                api_key="key",
                engine_id="engine",
                resilience=ResilienceConfig(name="sepana", base_url="https://sepana.test"),
            ),
            client_factory=factory,
        ),
        engine_id="engine",
    )

    result = sync_lens_events(
        source=source,
        unit_of_work_factory=sqlite_unit_of_work,
        index_target=target,
        batch_size=2,
    )

    assert result.batches == 3
    assert result.events == 3
    assert result.dropped == 1
    with sqlite_unit_of_work() as uow:
        comment = uow.repositories.comments.get("2-1")  # type: ignore[attr-defined]
        assert comment is not None
        assert comment.original_post.content_uri == "ipfs://QmPost"
        assert comment.original_profile.handle == "alice.lens"
        assert comment.profile.is_stub
        assert uow.repositories.posts.count() == 2  # type: ignore[attr-defined]

    assert {body["engine_id"] for body in inserted} == {"engine"}
    documents = [document for body in inserted for document in body["docs"]]
    assert {document["_id"]: document["source"] for document in documents} == {
        "1-1": "/ipfs/QmPost",
        "2-1": "/comment.json",
    }


@pytest.mark.integration
def test_rerunning_the_same_logs_creates_nothing_new(
    sqlite_unit_of_work: Callable[[], SqlAlchemyLensUnitOfWork],
    tmp_path: Path,
) -> None:
    source = JsonlLogSource(
        path=write_jsonl(tmp_path / "logs.jsonl", _records()),
        lens=LensConfig(contract_address=LENS_HUB),
    )

    first = sync_lens_events(
        source=source, unit_of_work_factory=sqlite_unit_of_work, batch_size=5
    )
    second = sync_lens_events(
        source=source, unit_of_work_factory=sqlite_unit_of_work, batch_size=5
    )

    assert first.created == 5
    assert second.created == 0
