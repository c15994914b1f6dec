"""Typed Lens hub events, as produced by the log decoder."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


class EventKind(StrEnum):
    PROFILE_CREATED = "ProfileCreated"
    POST_CREATED = "PostCreated"
    COMMENT_CREATED = "CommentCreated"


@dataclass(frozen=True, slots=True)
class ProfileCreated:
    profile_id: int
    to: str
    handle: str
    image_uri: str
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class PostCreated:
    profile_id: int
    pub_id: int
    content_uri: str
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class CommentCreated:
    profile_id: int
    pub_id: int
    profile_id_pointed: int
    pub_id_pointed: int
    content_uri: str
    timestamp: datetime


type LensEvent = ProfileCreated | PostCreated | CommentCreated


@dataclass(slots=True)
class EventBatch:
    """Events of one processing batch, split by kind in log order."""

    profiles: list[ProfileCreated] = field(default_factory=list["ProfileCreated"])
    posts: list[PostCreated] = field(default_factory=list["PostCreated"])
    comments: list[CommentCreated] = field(default_factory=list["CommentCreated"])
    dropped: int = 0

    def add(self, event: LensEvent) -> None:
        match event:
            case ProfileCreated():
                self.profiles.append(event)
            case PostCreated():
                self.posts.append(event)
            case CommentCreated():
                self.comments.append(event)

    def __len__(self) -> int:
        return len(self.profiles) + len(self.posts) + len(self.comments)
