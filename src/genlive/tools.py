"""Execute model function calls with registered handlers and answer them."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from genlive.bus import EventBus
from genlive.models.enums import EventType
from genlive.models.events import ToolCallCancellationEvent, ToolCallEvent
from genlive.models.messages import FunctionCall
from genlive.models.outbound import FunctionResponse, ToolResponse
from genlive.telemetry.base import Attr, SpanKind, TelemetryProvider
from genlive.telemetry.noop import NoopTelemetryProvider

logger = logging.getLogger("genlive.tools")

ToolHandler = Callable[[dict[str, Any]], Any]
"""Called with the call arguments; may return an awaitable."""


class ToolResponseSender(Protocol):
    def send_tool_response(self, tool_response: ToolResponse) -> Awaitable[bool]: ...


class ToolCallDispatcher:
    """Answers ``tool-call`` events using handlers registered by name.

    Each function call's result is wrapped as ``{"output": result}``.  A
    failing handler or an unknown tool name yields
    ``{"output": {"success": False, "error": message}}`` so the model
    always gets an answer.  All responses to one tool-call event go out in
    a single ``send_tool_response``.  Calls cancelled by the server before
    their response is sent are dropped.

    Handlers run on background tasks so the receive loop is never blocked.

    Example:
        dispatcher = ToolCallDispatcher(client.events, client)

        async def get_weather(args):
            return {"city": args["city"], "forecast": "sunny"}

        dispatcher.register("get_weather", get_weather)
    """

    def __init__(
        self,
        bus: EventBus,
        sender: ToolResponseSender,
        *,
        telemetry: TelemetryProvider | None = None,
    ) -> None:
        self._bus = bus
        self._sender = sender
        self._telemetry = telemetry or NoopTelemetryProvider()
        self._handlers: dict[str, ToolHandler] = {}
        self._in_flight: set[str] = set()
        self._cancelled: set[str] = set()
        self._scheduled_tasks: set[asyncio.Task[Any]] = set()
        self._subscriptions = [
            bus.subscribe(EventType.TOOL_CALL, self._on_tool_call),
            bus.subscribe(EventType.TOOL_CALL_CANCELLATION, self._on_cancellation),
        ]

    def register(self, name: str, handler: ToolHandler) -> None:
        self._handlers[name] = handler

    def unregister(self, name: str) -> bool:
        return self._handlers.pop(name, None) is not None

    @property
    def tool_names(self) -> list[str]:
        return sorted(self._handlers)

    @property
    def pending(self) -> int:
        """Number of tool-call events still being handled."""
        return len(self._scheduled_tasks)

    def detach(self) -> None:
        """Stop listening for tool calls.  Running handlers are not cancelled."""
        for sub_id in self._subscriptions:
            self._bus.unsubscribe(sub_id)
        self._subscriptions = []

    async def wait(self) -> None:
        """Wait until every scheduled tool call has been answered."""
        while self._scheduled_tasks:
            await asyncio.gather(*list(self._scheduled_tasks), return_exceptions=True)

    # -- Event handlers --

    def _on_tool_call(self, event: ToolCallEvent) -> None:
        if not event.function_calls:
            return
        names = ",".join(fc.name for fc in event.function_calls)
        self._in_flight.update(fc.id for fc in event.function_calls if fc.id is not None)
        task = asyncio.get_running_loop().create_task(
            self._handle_tool_call(event.function_calls),
            name=f"genlive_tool_call:{names}",
        )
        self._scheduled_tasks.add(task)
        task.add_done_callback(self._task_done)

    def _on_cancellation(self, event: ToolCallCancellationEvent) -> None:
        logger.info("Tool calls cancelled: %s", ", ".join(event.ids))
        self._cancelled.update(i for i in event.ids if i in self._in_flight)

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        """Done-callback: log exceptions and remove from tracked set."""
        self._scheduled_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Unhandled exception in task %s: %s",
                task.get_name(),
                exc,
                exc_info=exc,
            )

    # -- Execution --

    def _is_cancelled(self, call: FunctionCall) -> bool:
        return call.id is not None and call.id in self._cancelled

    async def _handle_tool_call(self, calls: tuple[FunctionCall, ...]) -> None:
        responses: list[FunctionResponse] = []
        try:
            for call in calls:
                if self._is_cancelled(call):
                    continue
                output = await self._execute(call)
                if self._is_cancelled(call):
                    logger.debug("Dropping result of cancelled tool call %s", call.id)
                    continue
                responses.append(
                    FunctionResponse(id=call.id, name=call.name, response={"output": output})
                )
        finally:
            for call in calls:
                if call.id is not None:
                    self._in_flight.discard(call.id)
                    self._cancelled.discard(call.id)

        if responses:
            await self._sender.send_tool_response(
                ToolResponse(function_responses=tuple(responses))
            )

    async def _execute(self, call: FunctionCall) -> Any:
        span_id = self._telemetry.start_span(
            SpanKind.LIVE_TOOL_CALL,
            f"live_tool:{call.name}",
            attributes={Attr.TOOL_NAME: call.name, Attr.TOOL_CALL_ID: call.id},
        )
        handler = self._handlers.get(call.name)
        if handler is None:
            logger.warning("No handler registered for tool %s", call.name)
            self._telemetry.end_span(span_id, status="error", error_message="unknown tool")
            return {"success": False, "error": f"Unknown tool: {call.name}"}

        try:
            logger.info("Executing tool %s(%s)", call.name, call.id)
            result = handler(dict(call.args))
            if hasattr(result, "__await__"):
                result = await result
        except Exception as exc:
            logger.exception("Error handling tool call %s(%s)", call.name, call.id)
            self._telemetry.end_span(span_id, status="error", error_message=str(exc))
            return {"success": False, "error": str(exc) or type(exc).__name__}

        self._telemetry.end_span(span_id)
        return result
