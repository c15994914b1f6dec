"""Derived identity keys for reconciled entities."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lensindex.domain.model import Comment, Post, Profile


def format_profile_id(profile_id: int) -> str:
    if profile_id < 0:
        raise ValueError(f"Invalid profile id: {profile_id}")
    return str(profile_id)


def format_post_id(profile_id: int, pub_id: int) -> str:
    """Return the composite key shared by posts and comments.

    Publication ids are only unique per profile, so both halves are kept.
    """
    if profile_id < 0 or pub_id < 0:
        raise ValueError(f"Invalid publication id: {profile_id}/{pub_id}")
    return f"{profile_id}-{pub_id}"


def profile_key(profile: Profile) -> str:
    return format_profile_id(profile.profile_id)


def post_key(post: Post) -> str:
    return format_post_id(post.profile_id, post.post_id)


def comment_key(comment: Comment) -> str:
    return format_post_id(comment.profile_id, comment.comment_id)
