"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .ipfs import IpfsConfig, get_ipfs_config
from .lens import LensConfig, get_lens_config
from .logging import configure_logging
from .sepana import SepanaConfig, get_sepana_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import SyncConfig, get_sync_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "IpfsConfig",
    "LensConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SepanaConfig",
    "StorageConfig",
    "SyncConfig",
    "configure_logging",
    "get_database_config",
    "get_ipfs_config",
    "get_lens_config",
    "get_sepana_config",
    "get_storage_config",
    "get_sync_config",
    "optional_env_var",
    "require_env_vars",
]
