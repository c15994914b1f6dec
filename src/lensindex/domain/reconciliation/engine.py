"""Reconcile one batch of Lens events into profiles, posts and comments.

A batch may reference entities that were never seen locally (a comment on a
post from another indexing window, a post whose profile was created before
the indexed block range). Such references are satisfied by stub entities so
that every relationship in the returned graph resolves.

The pass runs in three steps:
- collect every key the batch can touch and load the persisted rows in one
  lookup per collection
- merge profiles, then posts, then comments through an ``EntityCache``
- flush all cached entities back in the same dependency order
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from lensindex.domain.model import Comment, Post, Profile

from .cache import EntityCache
from .keys import comment_key, format_post_id, format_profile_id, post_key, profile_key

if TYPE_CHECKING:
    from datetime import datetime

    from lensindex.domain.events import CommentCreated, EventBatch, PostCreated, ProfileCreated
    from lensindex.domain.ports.unit_of_work import LensRepositories

log = getLogger(__name__)


@dataclass(slots=True)
class LookupKeys:
    """Every entity key a batch may read or write."""

    profiles: set[str] = field(default_factory=set[str])
    posts: set[str] = field(default_factory=set[str])
    comments: set[str] = field(default_factory=set[str])


@dataclass(slots=True)
class ReconciledEntities:
    """Entities produced by one reconciliation pass, in flush order."""

    profiles: list[Profile] = field(default_factory=list["Profile"])
    posts: list[Post] = field(default_factory=list["Post"])
    comments: list[Comment] = field(default_factory=list["Comment"])
    created: int = 0


def collect_lookup_keys(batch: EventBatch) -> LookupKeys:
    keys = LookupKeys()
    for profile in batch.profiles:
        keys.profiles.add(format_profile_id(profile.profile_id))
    for post in batch.posts:
        keys.profiles.add(format_profile_id(post.profile_id))
        keys.posts.add(format_post_id(post.profile_id, post.pub_id))
    for comment in batch.comments:
        own = format_post_id(comment.profile_id, comment.pub_id)
        pointed = format_post_id(comment.profile_id_pointed, comment.pub_id_pointed)
        keys.profiles.add(format_profile_id(comment.profile_id))
        keys.profiles.add(format_profile_id(comment.profile_id_pointed))
        keys.posts.update((own, pointed))
        keys.comments.update((own, pointed))
    return keys


class _MergeState:
    def __init__(
        self,
        profiles: EntityCache[Profile],
        posts: EntityCache[Post],
        comments: EntityCache[Comment],
    ) -> None:
        self.profiles = profiles
        self.posts = posts
        self.comments = comments

    def ensure_profile(self, profile_id: int, timestamp: datetime, *, context: str) -> Profile:
        key = format_profile_id(profile_id)
        profile, created = self.profiles.get_or_create(
            key,
            lambda: Profile(id=key, profile_id=profile_id, timestamp=timestamp),
        )
        if created:
            log.debug(f"Missing profile with ID {profile_id} for {context}, creating it")
        return profile

    def ensure_post(
        self,
        profile: Profile,
        pub_id: int,
        timestamp: datetime,
        *,
        content_uri: str | None,
        context: str | None = None,
    ) -> Post:
        key = format_post_id(profile.profile_id, pub_id)
        post, created = self.posts.get_or_create(
            key,
            lambda: Post(
                id=key,
                post_id=pub_id,
                profile_id=profile.profile_id,
                creator_profile=profile,
                content_uri=content_uri,
                timestamp=timestamp,
            ),
        )
        if created and context is not None:
            log.debug(
                f"Post {profile.profile_id}-{pub_id} for {context} could not be found, creating it"
            )
        return post

    def apply_profile(self, event: ProfileCreated) -> None:
        key = format_profile_id(event.profile_id)
        self.profiles.get_or_create(
            key,
            lambda: Profile(
                id=key,
                profile_id=event.profile_id,
                timestamp=event.timestamp,
                address=event.to,
                handle=event.handle,
                image_uri=event.image_uri,
            ),
        )

    def apply_post(self, event: PostCreated) -> None:
        creator = self.ensure_profile(
            event.profile_id, event.timestamp, context=f"post {event.pub_id}"
        )
        self.ensure_post(creator, event.pub_id, event.timestamp, content_uri=event.content_uri)

    def apply_comment(self, event: CommentCreated) -> None:
        context = f"comment {event.profile_id}-{event.pub_id}"
        pointed_profile = self.ensure_profile(
            event.profile_id_pointed, event.timestamp, context=context
        )
        pointed_post = self.ensure_post(
            pointed_profile,
            event.pub_id_pointed,
            event.timestamp,
            content_uri=None,
            context=context,
        )
        commenter = self.ensure_profile(event.profile_id, event.timestamp, context=context)
        # comments share the publication id space with posts
        self.ensure_post(
            commenter,
            event.pub_id,
            event.timestamp,
            content_uri=event.content_uri,
            context=context,
        )
        key = format_post_id(event.profile_id, event.pub_id)
        self.comments.get_or_create(
            key,
            lambda: Comment(
                id=key,
                comment_id=event.pub_id,
                profile_id=event.profile_id,
                profile=commenter,
                original_post_id=event.pub_id_pointed,
                original_post=pointed_post,
                original_profile_id=event.profile_id_pointed,
                original_profile=pointed_profile,
                content_uri=event.content_uri,
                timestamp=event.timestamp,
            ),
        )

    def result(self) -> ReconciledEntities:
        created = len(self.profiles.created) + len(self.posts.created) + len(self.comments.created)
        return ReconciledEntities(
            profiles=self.profiles.values(),
            posts=self.posts.values(),
            comments=self.comments.values(),
            created=created,
        )


def merge_batch(
    batch: EventBatch,
    *,
    profiles: EntityCache[Profile] | None = None,
    posts: EntityCache[Post] | None = None,
    comments: EntityCache[Comment] | None = None,
) -> ReconciledEntities:
    """Merge ``batch`` into the given caches without touching persistence."""

    state = _MergeState(
        profiles if profiles is not None else EntityCache[Profile](),
        posts if posts is not None else EntityCache[Post](),
        comments if comments is not None else EntityCache[Comment](),
    )
    for profile_event in batch.profiles:
        state.apply_profile(profile_event)
    for post_event in batch.posts:
        state.apply_post(post_event)
    for comment_event in batch.comments:
        state.apply_comment(comment_event)
    return state.result()


@dataclass(slots=True)
class LensReconciler:
    """Look up, merge and flush one event batch through a repository collection."""

    def __call__(self, batch: EventBatch, *, repositories: LensRepositories) -> ReconciledEntities:
        keys = collect_lookup_keys(batch)
        profiles = EntityCache.preload(
            repositories.profiles.find_by_keys(keys.profiles), key=profile_key
        )
        posts = EntityCache.preload(repositories.posts.find_by_keys(keys.posts), key=post_key)
        comments = EntityCache.preload(
            repositories.comments.find_by_keys(keys.comments), key=comment_key
        )
        log.debug(
            "Preloaded %s profiles, %s posts, %s comments",
            len(profiles.snapshot),
            len(posts.snapshot),
            len(comments.snapshot),
        )

        result = merge_batch(batch, profiles=profiles, posts=posts, comments=comments)

        repositories.profiles.upsert_all(result.profiles)
        repositories.posts.upsert_all(result.posts)
        repositories.comments.upsert_all(result.comments)
        return result
