"""genlive - async client for live bidirectional voice/text sessions with Gemini."""

from genlive._version import __version__
from genlive.bus import EventBus, EventCallback
from genlive.config import LiveClientConfig, build_connect_config
from genlive.errors import (
    AudioDecodeError,
    ConfigurationError,
    GenLiveError,
    classify_close,
    classify_connection_error,
)
from genlive.history import ConversationMessage, InMemoryConversationHistory
from genlive.live import (
    LiveChannel,
    LiveClient,
    LiveTransport,
    MockLiveChannel,
    MockLiveTransport,
)
from genlive.models import (
    AudioFrameEvent,
    CloseEvent,
    ConnectionErrorCategory,
    ConnectionErrorEvent,
    ConnectionState,
    ConversationEvent,
    DiagnosticEvent,
    DiagnosticKind,
    DiagnosticRecord,
    EventType,
    FunctionCall,
    FunctionResponse,
    InlineData,
    InterruptedEvent,
    ModelContentEvent,
    ModelMessageEvent,
    OpenEvent,
    Part,
    RealtimeChunk,
    Role,
    SetupCompleteEvent,
    ToolCallCancellationEvent,
    ToolCallEvent,
    ToolResponse,
    TurnCompleteEvent,
    UserMessageEvent,
)
from genlive.telemetry import MockTelemetryProvider, NoopTelemetryProvider, TelemetryProvider
from genlive.tools import ToolCallDispatcher, ToolHandler

__all__ = [
    "__version__",
    # Client
    "LiveClient",
    "LiveClientConfig",
    "build_connect_config",
    "EventBus",
    "EventCallback",
    # Transports
    "LiveChannel",
    "LiveTransport",
    "MockLiveChannel",
    "MockLiveTransport",
    # Collaborators
    "ConversationMessage",
    "InMemoryConversationHistory",
    "ToolCallDispatcher",
    "ToolHandler",
    # Errors
    "AudioDecodeError",
    "ConfigurationError",
    "GenLiveError",
    "classify_close",
    "classify_connection_error",
    # Enums
    "ConnectionErrorCategory",
    "ConnectionState",
    "DiagnosticKind",
    "EventType",
    "Role",
    # Content
    "FunctionCall",
    "FunctionResponse",
    "InlineData",
    "Part",
    "RealtimeChunk",
    "ToolResponse",
    # Events
    "AudioFrameEvent",
    "CloseEvent",
    "ConnectionErrorEvent",
    "ConversationEvent",
    "DiagnosticEvent",
    "DiagnosticRecord",
    "InterruptedEvent",
    "ModelContentEvent",
    "ModelMessageEvent",
    "OpenEvent",
    "SetupCompleteEvent",
    "ToolCallCancellationEvent",
    "ToolCallEvent",
    "TurnCompleteEvent",
    "UserMessageEvent",
    # Telemetry
    "MockTelemetryProvider",
    "NoopTelemetryProvider",
    "TelemetryProvider",
]
