"""Sepana search-index configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import ResilienceConfig, RetryPolicy

DEFAULT_SEPANA_BASE_URL = "https://api.sepana.io"
SEPANA_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class SepanaConfig:
    """Credentials and transport settings for the Sepana insert API."""

    api_key: str
    engine_id: str
    resilience: ResilienceConfig


def get_sepana_config(*, resilience: ResilienceConfig | None = None) -> SepanaConfig:
    values = require_env_vars(("SEPANA_API_KEY", "SEPANA_ENGINE_ID"))
    return SepanaConfig(
        api_key=values["SEPANA_API_KEY"],
        engine_id=values["SEPANA_ENGINE_ID"],
        resilience=resilience
        or ResilienceConfig(
            name="sepana",
            base_url=optional_env_var("SEPANA_BASE_URL", DEFAULT_SEPANA_BASE_URL),
            timeout_seconds=SEPANA_TIMEOUT_SECONDS,
            retry=RetryPolicy(),
            default_headers={"content-type": "application/json"},
        ),
    )
