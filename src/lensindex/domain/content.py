"""Dispatch of content URIs to the IPFS gateway or to plain HTTP."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import urlsplit

_IPFS_SCHEME = re.compile(r"^ipfs://(.+)$")
_RAW_CID = re.compile(r"^[a-zA-Z0-9]+$")


class ContentSource(StrEnum):
    GATEWAY = "gateway"
    DIRECT = "direct"


@dataclass(frozen=True, slots=True)
class ContentLocation:
    """Where to fetch a metadata document from.

    ``target`` is a gateway-relative path for ``GATEWAY`` and an absolute URL
    for ``DIRECT``.
    """

    source: ContentSource
    target: str


class UnexpectedContentUriError(ValueError):
    """Raised for content URIs that match none of the supported shapes."""

    def __init__(self, uri: str) -> None:
        super().__init__(f'Unexpected url "{uri}"')
        self.uri = uri


def resolve_content_uri(uri: str | None) -> ContentLocation | None:
    """Return the fetch location for ``uri``, or ``None`` when there is nothing to fetch."""

    if not uri:
        return None
    if uri.startswith("ipfs://"):
        match = _IPFS_SCHEME.match(uri)
        if match is None:
            raise UnexpectedContentUriError(uri)
        return ContentLocation(ContentSource.GATEWAY, f"ipfs/{match.group(1)}")
    if uri.startswith("/ipfs"):
        return ContentLocation(ContentSource.GATEWAY, uri)
    if uri.startswith(("http://", "https://")):
        if "ipfs/" in uri:
            return ContentLocation(ContentSource.GATEWAY, urlsplit(uri).path)
        return ContentLocation(ContentSource.DIRECT, uri)
    if _RAW_CID.fullmatch(uri):
        return ContentLocation(ContentSource.GATEWAY, f"ipfs/{uri}")
    raise UnexpectedContentUriError(uri)
