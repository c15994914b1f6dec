"""Event-to-entity reconciliation for Lens hub batches."""

from __future__ import annotations

from .cache import EntityCache
from .engine import (
    LensReconciler,
    LookupKeys,
    ReconciledEntities,
    collect_lookup_keys,
    merge_batch,
)
from .keys import comment_key, format_post_id, format_profile_id, post_key, profile_key

__all__ = [
    "EntityCache",
    "LensReconciler",
    "LookupKeys",
    "ReconciledEntities",
    "collect_lookup_keys",
    "comment_key",
    "format_post_id",
    "format_profile_id",
    "merge_batch",
    "post_key",
    "profile_key",
]
