"""Framing and transmission of outbound content, media and tool responses."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from genlive.bus import EventBus
from genlive.live._helpers import publish_diagnostic
from genlive.live.connection import ConnectionManager
from genlive.live.transport import LiveChannel
from genlive.models.enums import DiagnosticKind, RealtimeInputKind
from genlive.models.messages import Part
from genlive.models.outbound import RealtimeChunk, ToolResponse

logger = logging.getLogger("genlive.live.outbound")


def classify_realtime_input(chunks: Sequence[RealtimeChunk]) -> RealtimeInputKind:
    """Summarize a batch of media chunks for the traffic log."""
    has_audio = any(c.mime_type.startswith("audio/") for c in chunks)
    has_video = any(c.mime_type.startswith(("image/", "video/")) for c in chunks)
    if has_audio and has_video:
        return RealtimeInputKind.AUDIO_VIDEO
    if has_audio:
        return RealtimeInputKind.AUDIO
    if has_video:
        return RealtimeInputKind.VIDEO
    return RealtimeInputKind.UNKNOWN


class OutboundSender:
    """Sends on the current session, or refuses when there is none.

    Nothing is queued or retried: a send while not CONNECTED publishes one
    ``client.sendRejected`` diagnostic and returns ``False``, and a failed
    transport write publishes ``client.sendFailed`` and returns ``False``.
    """

    def __init__(self, bus: EventBus, connection: ConnectionManager) -> None:
        self._bus = bus
        self._connection = connection

    async def send(self, parts: Part | Sequence[Part], *, turn_complete: bool = True) -> bool:
        """Send a content turn (one part or several)."""
        batch = [parts] if isinstance(parts, Part) else list(parts)
        return await self._transmit(
            "send",
            lambda ch: ch.send_client_content(batch, turn_complete=turn_complete),
            DiagnosticKind.CLIENT_SEND,
            {
                "turns": [p.model_dump(exclude_none=True) for p in batch],
                "turnComplete": turn_complete,
            },
        )

    async def send_realtime_input(self, chunks: RealtimeChunk | Sequence[RealtimeChunk]) -> bool:
        """Stream media chunks; every chunk is sent in order."""
        batch = [chunks] if isinstance(chunks, RealtimeChunk) else list(chunks)
        if not batch:
            return True

        async def write(channel: LiveChannel) -> None:
            for chunk in batch:
                await channel.send_realtime_input(chunk)

        return await self._transmit(
            "send_realtime_input",
            write,
            DiagnosticKind.CLIENT_REALTIME_INPUT,
            str(classify_realtime_input(batch)),
        )

    async def send_tool_response(self, tool_response: ToolResponse) -> bool:
        """Answer function calls.  An empty response sends nothing."""
        if not tool_response.function_responses:
            logger.debug("send_tool_response() called with no function responses")
            return True
        return await self._transmit(
            "send_tool_response",
            lambda ch: ch.send_tool_response(tool_response),
            DiagnosticKind.CLIENT_TOOL_RESPONSE,
            tool_response.model_dump(by_alias=True),
        )

    async def _transmit(
        self,
        operation: str,
        write: Callable[[LiveChannel], Awaitable[None]],
        kind: DiagnosticKind,
        summary: Any,
    ) -> bool:
        channel = self._connection.channel
        if channel is None or not self._connection.is_connected:
            await publish_diagnostic(
                self._bus,
                logger,
                DiagnosticKind.SEND_REJECTED,
                f"{operation}: not connected ({self._connection.state})",
                level=logging.WARNING,
            )
            return False

        try:
            await write(channel)
        except Exception as exc:
            await publish_diagnostic(
                self._bus,
                logger,
                DiagnosticKind.SEND_FAILED,
                f"{operation}: {exc}",
                level=logging.WARNING,
            )
            return False

        await publish_diagnostic(self._bus, logger, kind, summary)
        return True
