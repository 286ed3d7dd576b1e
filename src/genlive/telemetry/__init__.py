"""Telemetry provider system for genlive."""

from genlive.telemetry.base import Attr, Metric, Span, SpanKind, TelemetryProvider
from genlive.telemetry.mock import MockTelemetryProvider
from genlive.telemetry.noop import NoopTelemetryProvider

__all__ = [
    "Attr",
    "Metric",
    "MockTelemetryProvider",
    "NoopTelemetryProvider",
    "Span",
    "SpanKind",
    "TelemetryProvider",
]
