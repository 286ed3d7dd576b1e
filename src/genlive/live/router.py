"""Dispatch of decoded inbound messages by kind."""

from __future__ import annotations

import logging
from typing import Any

from genlive.bus import EventBus
from genlive.live._helpers import publish_diagnostic
from genlive.live.content import ContentStreamProcessor
from genlive.models.enums import DiagnosticKind
from genlive.models.events import SetupCompleteEvent, ToolCallCancellationEvent, ToolCallEvent
from genlive.models.messages import (
    InboundMessage,
    ServerContentMessage,
    SetupCompleteMessage,
    ToolCallCancellationMessage,
    ToolCallMessage,
    UnknownMessage,
    decode_server_message,
)

logger = logging.getLogger("genlive.live.router")


class InboundMessageRouter:
    """Routes each inbound message to exactly one handler.

    Failures inside a handler are logged and published as diagnostics;
    :meth:`route` never raises, so one bad message cannot end the
    receive loop.
    """

    def __init__(self, bus: EventBus, content: ContentStreamProcessor) -> None:
        self._bus = bus
        self._content = content

    async def route(self, raw: Any) -> None:
        message = decode_server_message(raw)
        try:
            await self._dispatch(message)
        except Exception as exc:
            logger.exception("Error handling inbound %s message", message.kind)
            await publish_diagnostic(
                self._bus,
                logger,
                DiagnosticKind.HANDLER_ERROR,
                f"{message.kind}: {exc}",
                level=logging.ERROR,
            )

    async def _dispatch(self, message: InboundMessage) -> None:
        if isinstance(message, SetupCompleteMessage):
            await publish_diagnostic(self._bus, logger, DiagnosticKind.SERVER_SETUP_COMPLETE, "")
            await self._bus.publish(SetupCompleteEvent())
        elif isinstance(message, ToolCallMessage):
            await publish_diagnostic(
                self._bus,
                logger,
                DiagnosticKind.SERVER_TOOL_CALL,
                {"functionCalls": [fc.name for fc in message.function_calls]},
            )
            await self._bus.publish(ToolCallEvent(function_calls=message.function_calls))
        elif isinstance(message, ToolCallCancellationMessage):
            await publish_diagnostic(
                self._bus,
                logger,
                DiagnosticKind.SERVER_TOOL_CALL_CANCELLATION,
                {"ids": list(message.ids)},
            )
            await self._bus.publish(ToolCallCancellationEvent(ids=message.ids))
        elif isinstance(message, ServerContentMessage):
            await self._content.process(message)
        elif isinstance(message, UnknownMessage):
            await publish_diagnostic(
                self._bus,
                logger,
                DiagnosticKind.PROTOCOL_ANOMALY,
                message.reason or f"unmatched message (keys: {message.keys})",
                level=logging.WARNING,
            )
