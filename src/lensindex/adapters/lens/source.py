"""JSON-lines log source and the bundled pre-decoded args decoder."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from itertools import batched
from logging import getLogger
from typing import TYPE_CHECKING, cast

from pydantic import ValidationError

from lensindex.config.lens import LensConfig, get_lens_config
from lensindex.domain.events import EventKind
from lensindex.domain.ports.fetching import LensEventSource

from .schema import RawLog
from .translator import LogDecodeError, LogDecoder, decode_logs

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from pathlib import Path

    from lensindex.domain.events import EventBatch

log = getLogger(__name__)


def _default_topics() -> dict[str, EventKind]:
    return {kind.value.lower(): kind for kind in EventKind}


@dataclass(frozen=True, slots=True)
class ArgsDecoder:
    """Decoder for records that already carry decoded event arguments.

    Records are matched on ``topics[0]``; by default the topic is the event
    name itself (``ProfileCreated``, ``PostCreated``, ``CommentCreated``).
    Pass ``topics`` to match signature hashes instead.
    """

    topics: Mapping[str, EventKind] = field(default_factory=_default_topics)

    def kind_for(self, topic0: str) -> EventKind | None:
        return self.topics.get(topic0.lower())

    def decode(self, kind: EventKind, raw: RawLog) -> Mapping[str, object]:
        if raw.args is None:
            raise LogDecodeError(f"{kind} log carries no decoded args")
        return raw.args


@dataclass(slots=True)
class JsonlLogSource:
    """Read raw logs from a JSON-lines file and yield decoded batches in file order."""

    path: Path
    decoder: LogDecoder = field(default_factory=ArgsDecoder)
    lens: LensConfig = field(default_factory=get_lens_config)

    def __call__(self, *, batch_size: int) -> Iterator[EventBatch]:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        for chunk in batched(self._iter_records(), batch_size):
            raw_logs = [raw for raw in chunk if raw is not None]
            batch = decode_logs(
                raw_logs,
                decoder=self.decoder,
                contract_address=self.lens.contract_address,
            )
            batch.dropped += len(chunk) - len(raw_logs)
            yield batch

    def _iter_records(self) -> Iterator[RawLog | None]:
        with self.path.open(encoding="utf-8") as handle:
            for line_number, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                try:
                    yield RawLog.model_validate(json.loads(line))
                except (json.JSONDecodeError, ValidationError) as exc:
                    log.error(f"Skipping malformed log record at {self.path}:{line_number}: {exc}")
                    yield None


if TYPE_CHECKING:
    _decoder_check: LogDecoder = ArgsDecoder()
    _source_check: LensEventSource = JsonlLogSource(path=cast("Path", None))
