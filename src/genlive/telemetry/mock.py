"""Mock telemetry provider that records spans and metrics for test assertions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from genlive.telemetry.base import Span, SpanKind, TelemetryProvider


class MockTelemetryProvider(TelemetryProvider):
    """Records all spans and metrics in lists for test assertions.

    Example::

        telemetry = MockTelemetryProvider()
        client = LiveClient(transport=MockLiveTransport(), telemetry=telemetry)
        await client.connect("models/test", {})
        await client.disconnect()
        session = telemetry.get_spans(SpanKind.LIVE_SESSION)[0]
        assert session.attributes[Attr.CLOSE_EXPECTED] is True
    """

    def __init__(self) -> None:
        self._spans: dict[str, Span] = {}
        self.completed_spans: list[Span] = []
        self.metrics: list[dict[str, Any]] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def spans(self) -> list[Span]:
        """All completed spans."""
        return self.completed_spans

    def get_spans(self, kind: SpanKind) -> list[Span]:
        """Get completed spans of a specific kind."""
        return [s for s in self.completed_spans if s.kind == kind]

    def get_active_spans(self) -> list[Span]:
        """Get spans that have been started but not ended."""
        return list(self._spans.values())

    def get_metrics(self, name: str) -> list[dict[str, Any]]:
        return [m for m in self.metrics if m["name"] == name]

    def start_span(
        self,
        kind: SpanKind,
        name: str,
        *,
        attributes: dict[str, Any] | None = None,
    ) -> str:
        span = Span(kind=kind, name=name, attributes=dict(attributes) if attributes else {})
        self._spans[span.id] = span
        return span.id

    def end_span(
        self,
        span_id: str,
        *,
        status: str = "ok",
        error_message: str | None = None,
        attributes: dict[str, Any] | None = None,
    ) -> None:
        span = self._spans.pop(span_id, None)
        if span is None:
            return
        span.end_time = datetime.now(UTC)
        span.status = status
        span.error_message = error_message
        if attributes:
            span.attributes.update(attributes)
        self.completed_spans.append(span)

    def record_metric(self, name: str, value: float) -> None:
        self.metrics.append({"name": name, "value": value})
