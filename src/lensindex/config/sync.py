"""Synchronization defaults for the indexing pipeline."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LOG_BATCH_SIZE = 1000


@dataclass(frozen=True, slots=True)
class SyncConfig:
    log_batch_size: int = DEFAULT_LOG_BATCH_SIZE


def get_sync_config() -> SyncConfig:
    return SyncConfig()
