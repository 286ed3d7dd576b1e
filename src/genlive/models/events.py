"""Normalized, immutable events published by the live client."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, ClassVar

from genlive.models.enums import ConnectionErrorCategory, DiagnosticKind, EventType, Role
from genlive.models.messages import FunctionCall, Part


def _utcnow() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(UTC)


@dataclass(frozen=True)
class DiagnosticRecord:
    """One operator-facing log record."""

    kind: DiagnosticKind
    """What happened (traffic kind or failure kind)."""

    message: Any
    """Free-form payload: a short string or a JSON-like summary."""

    level: int = logging.DEBUG
    """Severity using :mod:`logging` levels."""

    date: datetime = field(default_factory=_utcnow)
    """When the record was produced."""


@dataclass(frozen=True)
class OpenEvent:
    """The session is established and ready to send."""

    type: ClassVar[EventType] = EventType.OPEN

    model: str
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class CloseEvent:
    """The session ended, either by ``disconnect()`` or by the transport."""

    type: ClassVar[EventType] = EventType.CLOSE

    reason: str
    """Close reason reported by the transport (may be empty)."""

    code: int | None = None
    """WebSocket close code when known."""

    category: ConnectionErrorCategory | None = None
    """Classification of an abnormal close; ``None`` for a normal close."""

    expected: bool = False
    """True when the close was requested through ``disconnect()``."""

    timestamp: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class ConnectionErrorEvent:
    """``connect()`` failed."""

    type: ClassVar[EventType] = EventType.CONNECTION_ERROR

    category: ConnectionErrorCategory
    message: str
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class SetupCompleteEvent:
    type: ClassVar[EventType] = EventType.SETUP_COMPLETE

    timestamp: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class ToolCallEvent:
    """The model requests one or more function calls."""

    type: ClassVar[EventType] = EventType.TOOL_CALL

    function_calls: tuple[FunctionCall, ...]
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class ToolCallCancellationEvent:
    """Previously issued function calls should not be answered."""

    type: ClassVar[EventType] = EventType.TOOL_CALL_CANCELLATION

    ids: tuple[str, ...]
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class InterruptedEvent:
    """Generation was aborted server-side (user barge-in)."""

    type: ClassVar[EventType] = EventType.INTERRUPTED

    timestamp: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class TurnCompleteEvent:
    type: ClassVar[EventType] = EventType.TURN_COMPLETE

    timestamp: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class AudioFrameEvent:
    """One decoded audio fragment from the model, in arrival order."""

    type: ClassVar[EventType] = EventType.AUDIO_FRAME

    data: bytes
    mime_type: str = "audio/pcm"
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class ModelContentEvent:
    """Non-audio parts of a model turn (text, executable code, results)."""

    type: ClassVar[EventType] = EventType.MODEL_CONTENT

    parts: tuple[Part, ...]
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class DiagnosticEvent:
    type: ClassVar[EventType] = EventType.DIAGNOSTIC

    record: DiagnosticRecord

    @property
    def kind(self) -> DiagnosticKind:
        return self.record.kind

    @property
    def timestamp(self) -> datetime:
        return self.record.date


@dataclass(frozen=True)
class UserMessageEvent:
    """A complete user utterance assembled from input transcription."""

    type: ClassVar[EventType] = EventType.USER_MESSAGE
    role: ClassVar[Role] = Role.USER

    text: str
    timestamp: datetime = field(default_factory=_utcnow)
    """Arrival time of the first transcription delta of the utterance."""


@dataclass(frozen=True)
class ModelMessageEvent:
    """A complete model message (output transcription or direct turn text)."""

    type: ClassVar[EventType] = EventType.MODEL_MESSAGE
    role: ClassVar[Role] = Role.MODEL

    text: str
    timestamp: datetime = field(default_factory=_utcnow)


MessageEvent = UserMessageEvent | ModelMessageEvent

ConversationEvent = (
    OpenEvent
    | CloseEvent
    | ConnectionErrorEvent
    | SetupCompleteEvent
    | ToolCallEvent
    | ToolCallCancellationEvent
    | InterruptedEvent
    | TurnCompleteEvent
    | AudioFrameEvent
    | ModelContentEvent
    | DiagnosticEvent
    | UserMessageEvent
    | ModelMessageEvent
)
