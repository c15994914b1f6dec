"""
Profiles, posts and comments reconciled from Lens hub events.

Identity is a derived string key: ``str(profile_id)`` for profiles and the
composite publication key (see ``domain.reconciliation.keys``) for posts and
comments. Stubs are entities created for a reference before their own event
was seen; they carry identifiers and a timestamp only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class Profile:
    id: str
    profile_id: int
    timestamp: datetime
    address: str | None = None
    handle: str | None = None
    image_uri: str | None = None

    @property
    def is_stub(self) -> bool:
        return self.handle is None and self.address is None


@dataclass(eq=False, kw_only=True)
class Post:
    id: str
    post_id: int
    profile_id: int
    creator_profile: Profile
    timestamp: datetime
    content_uri: str | None = None


@dataclass(eq=False, kw_only=True)
class Comment:
    id: str
    comment_id: int
    profile_id: int
    profile: Profile
    original_post_id: int
    original_post: Post
    original_profile_id: int
    original_profile: Profile
    timestamp: datetime
    content_uri: str | None = None
