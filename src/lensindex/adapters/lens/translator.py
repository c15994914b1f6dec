"""Translate raw Lens hub logs into typed domain events."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from lensindex.domain.events import (
    CommentCreated,
    EventBatch,
    EventKind,
    LensEvent,
    PostCreated,
    ProfileCreated,
)

from .schema import CommentCreatedArgs, PostCreatedArgs, ProfileCreatedArgs

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .schema import RawLog

log = getLogger(__name__)


class LogDecodeError(ValueError):
    """Raised when a log payload cannot be decoded into event arguments."""


class LogDecoder(Protocol):
    """Black-box ABI decoder: maps a topic to an event kind and decodes its arguments."""

    def kind_for(self, topic0: str) -> EventKind | None: ...

    def decode(self, kind: EventKind, raw: RawLog) -> Mapping[str, object]: ...


def translate_event(kind: EventKind, args: Mapping[str, object]) -> LensEvent:
    match kind:
        case EventKind.PROFILE_CREATED:
            profile = ProfileCreatedArgs.model_validate(args)
            return ProfileCreated(
                profile_id=profile.profile_id,
                to=profile.to,
                handle=profile.handle,
                image_uri=profile.image_uri,
                timestamp=profile.timestamp_utc,
            )
        case EventKind.POST_CREATED:
            post = PostCreatedArgs.model_validate(args)
            return PostCreated(
                profile_id=post.profile_id,
                pub_id=post.pub_id,
                content_uri=post.content_uri,
                timestamp=post.timestamp_utc,
            )
        case EventKind.COMMENT_CREATED:
            comment = CommentCreatedArgs.model_validate(args)
            return CommentCreated(
                profile_id=comment.profile_id,
                pub_id=comment.pub_id,
                profile_id_pointed=comment.profile_id_pointed,
                pub_id_pointed=comment.pub_id_pointed,
                content_uri=comment.content_uri,
                timestamp=comment.timestamp_utc,
            )


def decode_logs(
    logs: Iterable[RawLog],
    *,
    decoder: LogDecoder,
    contract_address: str,
) -> EventBatch:
    """Decode the Lens hub logs among ``logs``; a log that fails to decode is dropped."""

    batch = EventBatch()
    address = contract_address.lower()
    for raw in logs:
        if raw.address.lower() != address:
            continue
        kind = decoder.kind_for(raw.topic0)
        if kind is None:
            continue
        try:
            event = translate_event(kind, decoder.decode(kind, raw))
        except (ValueError, TypeError, KeyError, OverflowError) as exc:
            log.error(f"Failed to decode {kind} event ({raw.position}): {exc}")
            batch.dropped += 1
            continue
        batch.add(event)
    return batch
