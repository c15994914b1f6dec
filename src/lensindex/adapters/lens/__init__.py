"""Public interface for the Lens hub log adapter."""

from __future__ import annotations

from .schema import CommentCreatedArgs, PostCreatedArgs, ProfileCreatedArgs, RawLog
from .source import ArgsDecoder, JsonlLogSource
from .translator import LogDecodeError, LogDecoder, decode_logs, translate_event

__all__ = [
    "ArgsDecoder",
    "CommentCreatedArgs",
    "JsonlLogSource",
    "LogDecodeError",
    "LogDecoder",
    "PostCreatedArgs",
    "ProfileCreatedArgs",
    "RawLog",
    "decode_logs",
    "translate_event",
]
