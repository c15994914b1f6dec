"""Content gateway configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_IPFS_GATEWAY_URL = "https://subsquid.myfilebase.com/"
IPFS_BATCH_SIZE = 100
IPFS_TIMEOUT_SECONDS = 30.0

_JSON_HEADERS = {"content-type": "application/json"}


@dataclass(frozen=True, slots=True)
class IpfsConfig:
    """Transport settings for the IPFS gateway and for direct HTTP metadata fetches."""

    gateway: ResilienceConfig
    direct: ResilienceConfig
    batch_size: int = IPFS_BATCH_SIZE


def get_ipfs_config() -> IpfsConfig:
    gateway = ResilienceConfig(
        name="ipfs-gateway",
        base_url=optional_env_var("IPFS_GATEWAY_URL", DEFAULT_IPFS_GATEWAY_URL),
        timeout_seconds=IPFS_TIMEOUT_SECONDS,
        retry=RetryPolicy(),
        ratelimit=RateLimit(max_calls=IPFS_BATCH_SIZE, per_seconds=1.0),
        # content-addressed bodies never change
        cache=CacheConfig(),
        default_headers=_JSON_HEADERS,
    )
    direct = ResilienceConfig(
        name="metadata-http",
        timeout_seconds=IPFS_TIMEOUT_SECONDS,
        retry=RetryPolicy(),
        default_headers=_JSON_HEADERS,
    )
    return IpfsConfig(gateway=gateway, direct=direct)
