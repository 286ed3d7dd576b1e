"""Live session client facade."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from genlive.bus import EventBus, EventCallback
from genlive.config import LiveClientConfig
from genlive.live._helpers import Clock
from genlive.live.connection import ConnectionManager
from genlive.live.content import ContentStreamProcessor
from genlive.live.outbound import OutboundSender
from genlive.live.router import InboundMessageRouter
from genlive.live.transcription import TranscriptionBuffer
from genlive.live.transport import GenAITransport, LiveTransport
from genlive.models.enums import ConnectionState, EventType
from genlive.models.messages import Part
from genlive.models.outbound import RealtimeChunk, ToolResponse
from genlive.telemetry.base import TelemetryProvider
from genlive.telemetry.noop import NoopTelemetryProvider

logger = logging.getLogger("genlive.live.client")


class LiveClient:
    """Bidirectional voice/text session with a Gemini Live model.

    Composes the connection manager, inbound router, content processor,
    transcription buffer and outbound sender around one :class:`EventBus`.

    Example:
        client = LiveClient(LiveClientConfig(api_key="..."))
        client.on(EventType.MODEL_MESSAGE, lambda e: print(e.text))
        client.on(EventType.AUDIO_FRAME, speaker.play)

        await client.connect(config=build_connect_config(system_prompt="Be brief."))
        await client.send(Part(text="Hello"))
        await client.send_realtime_input(RealtimeChunk(mime_type="audio/pcm;rate=16000", data=pcm))
        ...
        await client.disconnect()
    """

    def __init__(
        self,
        config: LiveClientConfig | None = None,
        *,
        transport: LiveTransport | None = None,
        telemetry: TelemetryProvider | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._client_config = config or LiveClientConfig()
        self._transport = transport or GenAITransport(self._client_config)
        self._telemetry = telemetry or NoopTelemetryProvider()

        self._bus = EventBus()
        self._transcripts = TranscriptionBuffer(clock=clock)
        self._content = ContentStreamProcessor(
            self._bus,
            self._transcripts,
            telemetry=self._telemetry,
            clock=clock,
            audio_mime_prefix=self._client_config.audio_mime_prefix,
            current_session=lambda: self._connection.channel,
        )
        self._router = InboundMessageRouter(self._bus, self._content)
        self._connection = ConnectionManager(
            self._transport,
            self._bus,
            self._transcripts,
            self._router.route,
            telemetry=self._telemetry,
            flush_on_unexpected_close=self._client_config.flush_on_unexpected_close,
        )
        self._sender = OutboundSender(self._bus, self._connection)

    # -- Accessors --

    @property
    def status(self) -> ConnectionState:
        return self._connection.state

    @property
    def is_connected(self) -> bool:
        return self._connection.is_connected

    @property
    def model(self) -> str | None:
        return self._connection.model

    @property
    def config(self) -> Any:
        """A copy of the connect config of the current or last session."""
        return self._connection.config

    @property
    def events(self) -> EventBus:
        return self._bus

    @property
    def transcripts(self) -> TranscriptionBuffer:
        return self._transcripts

    @property
    def telemetry(self) -> TelemetryProvider:
        return self._telemetry

    # -- Subscriptions --

    def on(self, event_type: EventType | str, callback: EventCallback) -> str:
        return self._bus.subscribe(event_type, callback)

    def on_any(self, callback: EventCallback) -> str:
        return self._bus.subscribe(None, callback)

    def off(self, subscription_id: str) -> bool:
        return self._bus.unsubscribe(subscription_id)

    # -- Lifecycle --

    async def connect(self, model: str | None = None, config: Any = None) -> bool:
        """Open a session; *model* defaults to ``LiveClientConfig.model``."""
        return await self._connection.connect(model or self._client_config.model, config)

    async def disconnect(self) -> bool:
        return await self._connection.disconnect()

    # -- Outbound --

    async def send(self, parts: Part | Sequence[Part], *, turn_complete: bool = True) -> bool:
        return await self._sender.send(parts, turn_complete=turn_complete)

    async def send_text(self, text: str, *, turn_complete: bool = True) -> bool:
        """Shorthand for sending a single text part."""
        return await self._sender.send(Part(text=text), turn_complete=turn_complete)

    async def send_realtime_input(self, chunks: RealtimeChunk | Sequence[RealtimeChunk]) -> bool:
        return await self._sender.send_realtime_input(chunks)

    async def send_tool_response(self, tool_response: ToolResponse) -> bool:
        return await self._sender.send_tool_response(tool_response)
