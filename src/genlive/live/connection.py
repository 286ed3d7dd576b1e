"""Session lifecycle: connect, receive loop, disconnect and unexpected close."""

from __future__ import annotations

import asyncio
import contextlib
import copy
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from genlive.bus import EventBus
from genlive.errors import classify_close, classify_connection_error, close_details
from genlive.live._helpers import publish_all, publish_diagnostic
from genlive.live.transcription import TranscriptionBuffer
from genlive.live.transport import LiveChannel, LiveTransport
from genlive.models.enums import ConnectionState, DiagnosticKind, EventType
from genlive.models.events import CloseEvent, ConnectionErrorEvent, OpenEvent
from genlive.telemetry.base import Attr, SpanKind, TelemetryProvider
from genlive.telemetry.noop import NoopTelemetryProvider

logger = logging.getLogger("genlive.live.connection")

MessageHandler = Callable[[Any], Awaitable[None]]


class ConnectionManager:
    """Owns the connection state machine and the session handle.

    States move ``DISCONNECTED -> CONNECTING -> CONNECTED`` on a successful
    ``connect()`` and back to ``DISCONNECTED`` on failure, ``disconnect()``
    or a transport close.  Exactly one receive task per session hands raw
    inbound messages to *on_message*, so inbound handling is serialized.
    """

    def __init__(
        self,
        transport: LiveTransport,
        bus: EventBus,
        transcripts: TranscriptionBuffer,
        on_message: MessageHandler,
        *,
        telemetry: TelemetryProvider | None = None,
        flush_on_unexpected_close: bool = False,
    ) -> None:
        self._transport = transport
        self._bus = bus
        self._transcripts = transcripts
        self._on_message = on_message
        self._telemetry = telemetry or NoopTelemetryProvider()
        self._flush_on_unexpected_close = flush_on_unexpected_close

        self._state = ConnectionState.DISCONNECTED
        self._model: str | None = None
        self._config: Any = None
        self._channel: LiveChannel | None = None
        self._receive_task: asyncio.Task[None] | None = None
        self._session_span: str | None = None
        self._turn_count = 0

        bus.subscribe(EventType.TURN_COMPLETE, self._count_turn)

    # -- Accessors --

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    @property
    def model(self) -> str | None:
        return self._model

    @property
    def config(self) -> Any:
        """A copy of the config used for the current or last session."""
        return copy.deepcopy(self._config)

    @property
    def channel(self) -> LiveChannel | None:
        return self._channel

    # -- Lifecycle --

    async def connect(self, model: str, config: Any = None) -> bool:
        """Open a session.

        Returns ``False`` without side effects unless the manager is
        DISCONNECTED, and ``False`` after publishing ``connection-error``
        when the handshake fails.
        """
        if self._state is not ConnectionState.DISCONNECTED:
            logger.warning("connect() ignored: connection is %s", self._state)
            return False

        self._state = ConnectionState.CONNECTING
        self._model = model
        self._config = copy.deepcopy(config)
        span_id = self._telemetry.start_span(
            SpanKind.LIVE_CONNECT, "live.connect", attributes={Attr.MODEL: model}
        )

        try:
            channel = await self._transport.open(model, config)
        except asyncio.CancelledError:
            self._state = ConnectionState.DISCONNECTED
            self._telemetry.end_span(span_id, status="error", error_message="cancelled")
            raise
        except Exception as exc:
            self._state = ConnectionState.DISCONNECTED
            category = classify_connection_error(exc)
            self._telemetry.end_span(
                span_id,
                status="error",
                error_message=str(exc),
                attributes={Attr.ERROR_CATEGORY: str(category)},
            )
            await publish_diagnostic(
                self._bus,
                logger,
                DiagnosticKind.CONNECTION_ERROR,
                f"{category}: {exc}",
                level=logging.WARNING,
            )
            await self._bus.publish(ConnectionErrorEvent(category=category, message=str(exc)))
            return False

        self._telemetry.end_span(span_id)
        self._channel = channel
        self._state = ConnectionState.CONNECTED
        self._turn_count = 0
        # Text left over from a previous session never belongs to this one
        self._transcripts.clear()
        self._session_span = self._telemetry.start_span(
            SpanKind.LIVE_SESSION, "live.session", attributes={Attr.MODEL: model}
        )

        await publish_diagnostic(self._bus, logger, DiagnosticKind.CLIENT_OPEN, model)
        await self._bus.publish(OpenEvent(model=model))

        # An ``open`` subscriber may already have disconnected
        if self._channel is channel:
            self._receive_task = asyncio.create_task(
                self._receive_loop(channel),
                name=f"genlive_live_recv:{model}",
            )
        return True

    async def disconnect(self) -> bool:
        """Close the session after flushing pending transcripts.

        Safe to call from an event subscriber running on the receive task.
        """
        channel = self._channel
        if channel is None:
            return False
        # Clearing the handle first makes re-entrant calls no-ops and tells
        # the receive loop to stop.
        self._channel = None

        await publish_all(self._bus, self._transcripts.flush_all())

        task = self._receive_task
        self._receive_task = None
        if task is not None and task is not asyncio.current_task():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task

        with contextlib.suppress(Exception):
            await channel.close()

        self._state = ConnectionState.DISCONNECTED
        self._end_session_span(code=1000, reason="disconnect", expected=True)
        await publish_diagnostic(self._bus, logger, DiagnosticKind.CLIENT_CLOSE, "disconnect")
        await self._bus.publish(CloseEvent(reason="disconnect", code=1000, expected=True))
        return True

    # -- Receive loop --

    async def _receive_loop(self, channel: LiveChannel) -> None:
        error: Exception | None = None
        try:
            async with contextlib.aclosing(channel.receive()) as stream:
                async for raw in stream:
                    await self._on_message(raw)
                    if self._channel is not channel:
                        return
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            error = exc

        if self._channel is not channel:
            return
        await self._handle_unexpected_close(channel, error)

    async def _handle_unexpected_close(
        self, channel: LiveChannel, error: Exception | None
    ) -> None:
        code, reason = close_details(error)
        if error is None and not reason:
            reason = "receive stream ended"
        category = classify_close(code, reason)

        self._channel = None
        self._receive_task = None
        self._state = ConnectionState.DISCONNECTED

        if self._flush_on_unexpected_close:
            await publish_all(self._bus, self._transcripts.flush_all())
        elif not self._transcripts.is_idle():
            logger.debug("Dropping pending transcripts after unexpected close")
            self._transcripts.clear()

        with contextlib.suppress(Exception):
            await channel.close()

        self._end_session_span(code=code, reason=reason, expected=False)
        await publish_diagnostic(
            self._bus,
            logger,
            DiagnosticKind.SERVER_CLOSE,
            f"{code} {reason}".strip(),
            level=logging.WARNING if category is not None else logging.DEBUG,
        )
        await self._bus.publish(CloseEvent(reason=reason, code=code, category=category))

    # -- Telemetry --

    def _count_turn(self, _event: Any) -> None:
        self._turn_count += 1

    def _end_session_span(self, *, code: int | None, reason: str, expected: bool) -> None:
        span_id = self._session_span
        if span_id is None:
            return
        self._session_span = None
        self._telemetry.end_span(
            span_id,
            attributes={
                Attr.CLOSE_CODE: code,
                Attr.CLOSE_REASON: reason,
                Attr.CLOSE_EXPECTED: expected,
                Attr.TURN_COUNT: self._turn_count,
            },
        )
