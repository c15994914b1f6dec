"""Ports for persisting the Lens entity graph."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from lensindex.domain.model import Comment, Post, Profile

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Sequence


@runtime_checkable
class EntityRepository[TEntity](Protocol):
    """Key-set lookup and bulk upsert over one entity collection."""

    def find_by_keys(self, keys: Collection[str]) -> Sequence[TEntity]: ...

    def upsert_all(self, entities: Iterable[TEntity]) -> None: ...


@runtime_checkable
class ProfileRepository(EntityRepository[Profile], Protocol):
    """Repository contract for profiles."""


@runtime_checkable
class PostRepository(EntityRepository[Post], Protocol):
    """Repository contract for posts."""


@runtime_checkable
class CommentRepository(EntityRepository[Comment], Protocol):
    """Repository contract for comments."""
