"""Decoded event args shared by Lens adapter tests."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def profile_args() -> dict[str, Any]:
    return {
        "profileId": "0x01",
        "to": "0xABCDEF0000000000000000000000000000000001",
        "handle": "lensprotocol",
        "imageURI": "ipfs://QmProfileImage",
        "timestamp": 1652700000,
    }


@pytest.fixture
def post_args() -> dict[str, Any]:
    return {
        "profileId": "1",
        "pubId": 2,
        "contentURI": "ipfs://QmPostContent",
        "timestamp": "1652700100",
    }


@pytest.fixture
def comment_args() -> dict[str, Any]:
    return {
        "profileId": 3,
        "pubId": 1,
        "profileIdPointed": 1,
        "pubIdPointed": 2,
        "contentURI": "https://example.org/comment.json",
        "timestamp": 1652700200,
    }
