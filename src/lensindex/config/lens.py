"""Lens hub contract settings."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var

LENS_HUB_ADDRESS = "0xDb46d1Dc155634FbC732f92E853b10B288AD5a1d"


@dataclass(frozen=True, slots=True)
class LensConfig:
    contract_address: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "contract_address", self.contract_address.lower())


def get_lens_config() -> LensConfig:
    return LensConfig(contract_address=optional_env_var("LENS_HUB_ADDRESS", LENS_HUB_ADDRESS))
