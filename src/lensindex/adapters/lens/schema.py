"""Pydantic models describing raw Lens hub log records and decoded event args."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


def _parse_uint(value: object) -> object:
    if isinstance(value, str):
        text = value.strip()
        return int(text, 16) if text.lower().startswith("0x") else int(text)
    return value


# ids are stored in signed 64-bit BigInteger columns
MAX_STORED_ID = 2**63 - 1
# 9999-12-31T23:59:59Z, the last second a datetime can hold
MAX_UNIX_TIMESTAMP = 253_402_300_799

Uint = Annotated[int, Field(ge=0, le=MAX_STORED_ID), BeforeValidator(_parse_uint)]
UnixTimestamp = Annotated[int, Field(ge=0, le=MAX_UNIX_TIMESTAMP), BeforeValidator(_parse_uint)]


class LensBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RawLog(LensBaseModel):
    """One EVM log entry as delivered by the upstream log source."""

    address: str
    topics: list[str] = Field(min_length=1)
    data: str = "0x"
    transaction_hash: str | None = Field(default=None, alias="transactionHash")
    block_number: int | None = Field(default=None, alias="blockNumber")
    log_index: int | None = Field(default=None, alias="logIndex")
    args: dict[str, Any] | None = None

    @property
    def topic0(self) -> str:
        return self.topics[0].lower()

    @property
    def position(self) -> str:
        return f"block={self.block_number} log={self.log_index} tx={self.transaction_hash}"


class TimestampedArgs(LensBaseModel):
    timestamp: UnixTimestamp

    @property
    def timestamp_utc(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=UTC)


class ProfileCreatedArgs(TimestampedArgs):
    profile_id: Uint = Field(alias="profileId")
    to: str
    handle: str
    image_uri: str = Field(alias="imageURI")

    @field_validator("to")
    @classmethod
    def _normalize_address(cls, value: str) -> str:
        return value.lower()


class PostCreatedArgs(TimestampedArgs):
    profile_id: Uint = Field(alias="profileId")
    pub_id: Uint = Field(alias="pubId")
    content_uri: str = Field(alias="contentURI")


class CommentCreatedArgs(PostCreatedArgs):
    profile_id_pointed: Uint = Field(alias="profileIdPointed")
    pub_id_pointed: Uint = Field(alias="pubIdPointed")
