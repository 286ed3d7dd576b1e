"""Live session client: connection, inbound routing, transcripts and outbound sends."""

from genlive.live.audio import AudioExtraction, AudioFragment, decode_payload, extract_audio
from genlive.live.client import LiveClient
from genlive.live.connection import ConnectionManager
from genlive.live.content import ContentStreamProcessor
from genlive.live.mock import MockCall, MockConnectionClosed, MockLiveChannel, MockLiveTransport
from genlive.live.outbound import OutboundSender, classify_realtime_input
from genlive.live.router import InboundMessageRouter
from genlive.live.transcription import PendingTranscript, TranscriptionBuffer
from genlive.live.transport import GenAILiveChannel, GenAITransport, LiveChannel, LiveTransport

__all__ = [
    # Client
    "LiveClient",
    # Components
    "ConnectionManager",
    "ContentStreamProcessor",
    "InboundMessageRouter",
    "OutboundSender",
    "PendingTranscript",
    "TranscriptionBuffer",
    "classify_realtime_input",
    # Audio
    "AudioExtraction",
    "AudioFragment",
    "decode_payload",
    "extract_audio",
    # Transports
    "GenAILiveChannel",
    "GenAITransport",
    "LiveChannel",
    "LiveTransport",
    # Mocks
    "MockCall",
    "MockConnectionClosed",
    "MockLiveChannel",
    "MockLiveTransport",
]
