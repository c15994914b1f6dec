"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import LensEventSource, MetadataDocument, MetadataFetcher, MetadataRequest
from .indexing import SearchIndex
from .persistence import CommentRepository, EntityRepository, PostRepository, ProfileRepository
from .unit_of_work import LensRepositories, LensUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "CommentRepository",
    "EntityRepository",
    "LensEventSource",
    "LensRepositories",
    "LensUnitOfWork",
    "MetadataDocument",
    "MetadataFetcher",
    "MetadataRequest",
    "PostRepository",
    "ProfileRepository",
    "RepositoryCollection",
    "SearchIndex",
    "UnitOfWork",
]
