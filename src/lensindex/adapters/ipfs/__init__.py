"""IPFS metadata adapter."""

from __future__ import annotations

from .fetcher import IpfsMetadataFetcher

__all__ = ["IpfsMetadataFetcher"]
