"""Outbound frame payloads."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from genlive.models.messages import WireModel


class RealtimeChunk(WireModel):
    """One unframed realtime media chunk (e.g. ``audio/pcm`` or ``image/jpeg``)."""

    mime_type: str
    data: bytes | str


class FunctionResponse(WireModel):
    id: str | None = None
    name: str = ""
    response: dict[str, Any] = Field(default_factory=dict)


class ToolResponse(WireModel):
    """Results for one or more function calls, keyed by call id."""

    function_responses: tuple[FunctionResponse, ...] = ()
