"""Inbound wire models and the decode-once boundary for server messages.

The Live API delivers one JSON object per message whose *kind* is given by
which top-level field is present.  :func:`decode_server_message` turns that
shape (or a ``google.genai`` ``LiveServerMessage``) into exactly one member
of :data:`InboundMessage` so nothing downstream has to look for keys.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Immutable model accepting both camelCase wire names and snake_case names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class InlineData(WireModel):
    """Binary payload tagged with a MIME type.

    ``data`` is base64 text on the JSON wire and raw bytes when the message
    was already decoded by ``google-genai``.
    """

    mime_type: str = ""
    data: bytes | str = b""


class Part(WireModel):
    """One fragment of model or client content."""

    text: str | None = None
    inline_data: InlineData | None = None
    executable_code: dict[str, Any] | None = None
    code_execution_result: dict[str, Any] | None = None
    thought: bool | None = None


class FunctionCall(WireModel):
    id: str | None = None
    name: str = ""
    args: dict[str, Any] = Field(default_factory=dict)


class SetupCompleteMessage(WireModel):
    kind: Literal["setup_complete"] = "setup_complete"


class ToolCallMessage(WireModel):
    kind: Literal["tool_call"] = "tool_call"
    function_calls: tuple[FunctionCall, ...] = ()


class ToolCallCancellationMessage(WireModel):
    kind: Literal["tool_call_cancellation"] = "tool_call_cancellation"
    ids: tuple[str, ...] = ()


class ServerContentMessage(WireModel):
    """Server content; every field is independent and may co-occur."""

    kind: Literal["server_content"] = "server_content"
    interrupted: bool = False
    turn_complete: bool = False
    input_transcription: str | None = None
    output_transcription: str | None = None
    model_turn: tuple[Part, ...] | None = None


class UnknownMessage(WireModel):
    """A message matching none of the known shapes."""

    kind: Literal["unknown"] = "unknown"
    raw: dict[str, Any] = Field(default_factory=dict)
    reason: str | None = None

    @property
    def keys(self) -> list[str]:
        return sorted(self.raw)


InboundMessage = (
    SetupCompleteMessage
    | ToolCallMessage
    | ToolCallCancellationMessage
    | ServerContentMessage
    | UnknownMessage
)


def _as_mapping(raw: Any) -> dict[str, Any] | None:
    if isinstance(raw, Mapping):
        return dict(raw)
    dump = getattr(raw, "model_dump", None)
    if callable(dump):
        return dump(by_alias=True, exclude_none=True)
    return None


def _lookup(data: Mapping[str, Any], name: str) -> Any:
    """Read *name* from a wire mapping under its camelCase or snake_case key."""
    camel = to_camel(name)
    if data.get(camel) is not None:
        return data[camel]
    return data.get(name)


def _transcription_text(value: Any) -> str | None:
    if isinstance(value, Mapping):
        return value.get("text")
    return getattr(value, "text", None)


def _decode_server_content(content: Mapping[str, Any]) -> ServerContentMessage:
    model_turn = _lookup(content, "model_turn")
    parts: tuple[Part, ...] | None = None
    if model_turn is not None:
        raw_parts = model_turn.get("parts") if isinstance(model_turn, Mapping) else None
        parts = tuple(Part.model_validate(p) for p in raw_parts or ())

    return ServerContentMessage(
        interrupted=bool(_lookup(content, "interrupted")),
        turn_complete=bool(_lookup(content, "turn_complete")),
        input_transcription=_transcription_text(_lookup(content, "input_transcription")),
        output_transcription=_transcription_text(_lookup(content, "output_transcription")),
        model_turn=parts,
    )


def decode_server_message(raw: Any) -> InboundMessage:
    """Decode one raw inbound message.

    Precedence follows the protocol: setup acknowledgement, tool call,
    tool-call cancellation, then server content.  Anything else (including
    a known shape whose payload fails validation) becomes
    :class:`UnknownMessage`; this function never raises.
    """
    data = _as_mapping(raw)
    if data is None:
        return UnknownMessage(raw={"repr": repr(raw)}, reason="not a mapping")

    try:
        if _lookup(data, "setup_complete") is not None:
            return SetupCompleteMessage()

        tool_call = _lookup(data, "tool_call")
        if tool_call is not None:
            return ToolCallMessage.model_validate(tool_call)

        cancellation = _lookup(data, "tool_call_cancellation")
        if cancellation is not None:
            return ToolCallCancellationMessage.model_validate(cancellation)

        content = _lookup(data, "server_content")
        if isinstance(content, Mapping):
            return _decode_server_content(content)
    except (ValidationError, AttributeError, TypeError) as exc:
        return UnknownMessage(raw=data, reason=f"malformed payload: {exc}")

    return UnknownMessage(raw=data)
