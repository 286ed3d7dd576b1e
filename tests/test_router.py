"""Tests for inbound message routing."""

from __future__ import annotations

from unittest.mock import AsyncMock

from genlive.bus import EventBus
from genlive.live.router import InboundMessageRouter
from genlive.models.enums import DiagnosticKind, EventType
from tests.conftest import EventRecorder, turn_complete


def _router(bus: EventBus, recorder: EventRecorder) -> tuple[InboundMessageRouter, AsyncMock]:
    bus.subscribe(None, recorder)
    content = AsyncMock()
    return InboundMessageRouter(bus, content), content


class TestRouting:
    async def test_setup_complete(self, bus: EventBus, recorder: EventRecorder) -> None:
        router, _ = _router(bus, recorder)
        await router.route({"setupComplete": {}})

        assert recorder.types == [EventType.SETUP_COMPLETE]
        assert len(recorder.diagnostics(DiagnosticKind.SERVER_SETUP_COMPLETE)) == 1

    async def test_tool_call(self, bus: EventBus, recorder: EventRecorder) -> None:
        router, _ = _router(bus, recorder)
        await router.route(
            {"toolCall": {"functionCalls": [{"id": "c1", "name": "lookup", "args": {"q": 1}}]}}
        )

        event = recorder.of_type(EventType.TOOL_CALL)[0]
        assert event.function_calls[0].name == "lookup"
        diag = recorder.diagnostics(DiagnosticKind.SERVER_TOOL_CALL)[0]
        assert diag.record.message == {"functionCalls": ["lookup"]}

    async def test_tool_call_cancellation(self, bus: EventBus, recorder: EventRecorder) -> None:
        router, _ = _router(bus, recorder)
        await router.route({"toolCallCancellation": {"ids": ["c1"]}})

        assert recorder.of_type(EventType.TOOL_CALL_CANCELLATION)[0].ids == ("c1",)

    async def test_server_content_goes_to_processor(
        self, bus: EventBus, recorder: EventRecorder
    ) -> None:
        router, content = _router(bus, recorder)
        await router.route(turn_complete())

        content.process.assert_awaited_once()
        assert content.process.await_args.args[0].turn_complete is True

    async def test_unknown_message_is_anomaly(
        self, bus: EventBus, recorder: EventRecorder
    ) -> None:
        router, content = _router(bus, recorder)
        await router.route({"goAway": {"timeLeft": "10s"}})

        assert recorder.types == []
        anomalies = recorder.diagnostics(DiagnosticKind.PROTOCOL_ANOMALY)
        assert len(anomalies) == 1
        assert "goAway" in anomalies[0].record.message
        content.process.assert_not_awaited()

    async def test_handler_error_does_not_raise(
        self, bus: EventBus, recorder: EventRecorder
    ) -> None:
        router, content = _router(bus, recorder)
        content.process.side_effect = RuntimeError("bad content")

        await router.route(turn_complete())

        errors = recorder.diagnostics(DiagnosticKind.HANDLER_ERROR)
        assert len(errors) == 1
        assert "bad content" in errors[0].record.message
