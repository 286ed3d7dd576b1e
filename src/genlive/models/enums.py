"""All string enums for genlive."""

from __future__ import annotations

from enum import StrEnum, unique


@unique
class ConnectionState(StrEnum):
    """Lifecycle state of the live session connection."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


@unique
class Role(StrEnum):
    USER = "user"
    MODEL = "model"


@unique
class EventType(StrEnum):
    """Names of the events published on the :class:`~genlive.bus.EventBus`."""

    OPEN = "open"
    CLOSE = "close"
    CONNECTION_ERROR = "connection-error"
    SETUP_COMPLETE = "setup-complete"
    TOOL_CALL = "tool-call"
    TOOL_CALL_CANCELLATION = "tool-call-cancellation"
    INTERRUPTED = "interrupted"
    TURN_COMPLETE = "turn-complete"
    AUDIO_FRAME = "audio-frame"
    MODEL_CONTENT = "model-content"
    DIAGNOSTIC = "diagnostic"
    USER_MESSAGE = "user-message"
    MODEL_MESSAGE = "model-message"


@unique
class ConnectionErrorCategory(StrEnum):
    """Best-effort classification of connection failures (operator messaging only)."""

    AUTH = "auth"
    PERMISSION = "permission"
    QUOTA = "quota"
    NETWORK = "network"
    UNKNOWN = "unknown"


@unique
class DiagnosticKind(StrEnum):
    # Traffic log
    CLIENT_OPEN = "client.open"
    CLIENT_CLOSE = "client.close"
    CLIENT_SEND = "client.send"
    CLIENT_REALTIME_INPUT = "client.realtimeInput"
    CLIENT_TOOL_RESPONSE = "client.toolResponse"
    SERVER_SETUP_COMPLETE = "server.setupComplete"
    SERVER_TOOL_CALL = "server.toolCall"
    SERVER_TOOL_CALL_CANCELLATION = "server.toolCallCancellation"
    SERVER_CONTENT = "server.content"
    SERVER_INPUT_TRANSCRIPTION = "server.inputTranscription"
    SERVER_OUTPUT_TRANSCRIPTION = "server.outputTranscription"
    SERVER_AUDIO = "server.audio"
    SERVER_CLOSE = "server.close"
    # Failures
    CONNECTION_ERROR = "client.connectionError"
    SEND_REJECTED = "client.sendRejected"
    SEND_FAILED = "client.sendFailed"
    PROTOCOL_ANOMALY = "server.unknownMessage"
    HANDLER_ERROR = "client.handlerError"


@unique
class RealtimeInputKind(StrEnum):
    AUDIO = "audio"
    VIDEO = "video"
    AUDIO_VIDEO = "audio + video"
    UNKNOWN = "unknown"
