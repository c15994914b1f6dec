"""Pydantic models describing the Sepana insert API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class SepanaBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class InsertDataRequest(SepanaBaseModel):
    engine_id: str
    docs: list[dict[str, Any]]


class ErrorResponse(SepanaBaseModel):
    error: str | None = None
    message: str | None = None
