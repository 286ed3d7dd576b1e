"""Data models: enums, wire messages, outbound frames and published events."""

from genlive.models.enums import (
    ConnectionErrorCategory,
    ConnectionState,
    DiagnosticKind,
    EventType,
    RealtimeInputKind,
    Role,
)
from genlive.models.events import (
    AudioFrameEvent,
    CloseEvent,
    ConnectionErrorEvent,
    ConversationEvent,
    DiagnosticEvent,
    DiagnosticRecord,
    InterruptedEvent,
    MessageEvent,
    ModelContentEvent,
    ModelMessageEvent,
    OpenEvent,
    SetupCompleteEvent,
    ToolCallCancellationEvent,
    ToolCallEvent,
    TurnCompleteEvent,
    UserMessageEvent,
)
from genlive.models.messages import (
    FunctionCall,
    InboundMessage,
    InlineData,
    Part,
    ServerContentMessage,
    SetupCompleteMessage,
    ToolCallCancellationMessage,
    ToolCallMessage,
    UnknownMessage,
    decode_server_message,
)
from genlive.models.outbound import FunctionResponse, RealtimeChunk, ToolResponse

__all__ = [
    # Enums
    "ConnectionErrorCategory",
    "ConnectionState",
    "DiagnosticKind",
    "EventType",
    "RealtimeInputKind",
    "Role",
    # Events
    "AudioFrameEvent",
    "CloseEvent",
    "ConnectionErrorEvent",
    "ConversationEvent",
    "DiagnosticEvent",
    "DiagnosticRecord",
    "InterruptedEvent",
    "MessageEvent",
    "ModelContentEvent",
    "ModelMessageEvent",
    "OpenEvent",
    "SetupCompleteEvent",
    "ToolCallCancellationEvent",
    "ToolCallEvent",
    "TurnCompleteEvent",
    "UserMessageEvent",
    # Wire models
    "FunctionCall",
    "InboundMessage",
    "InlineData",
    "Part",
    "ServerContentMessage",
    "SetupCompleteMessage",
    "ToolCallCancellationMessage",
    "ToolCallMessage",
    "UnknownMessage",
    "decode_server_message",
    # Outbound
    "FunctionResponse",
    "RealtimeChunk",
    "ToolResponse",
]
