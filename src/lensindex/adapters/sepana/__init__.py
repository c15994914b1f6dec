"""Public interface for the Sepana adapter."""

from __future__ import annotations

from .client import (
    INSERT_DATA_PATH,
    SEPANA_BATCH_SIZE,
    SepanaAPIError,
    SepanaClient,
    split_into_batches,
)
from .schema import InsertDataRequest

__all__ = [
    "INSERT_DATA_PATH",
    "SEPANA_BATCH_SIZE",
    "InsertDataRequest",
    "SepanaAPIError",
    "SepanaClient",
    "split_into_batches",
]
