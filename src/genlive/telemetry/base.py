"""Telemetry provider ABC, Span dataclass, SpanKind enum, and Attr constants."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class SpanKind(StrEnum):
    """Span classifications for telemetry."""

    LIVE_CONNECT = "live.connect"
    LIVE_SESSION = "live.session"
    LIVE_TOOL_CALL = "live.tool_call"


class Attr:
    """Well-known attribute key constants for telemetry spans."""

    MODEL = "model"

    # Session
    CLOSE_CODE = "live.close_code"
    CLOSE_REASON = "live.close_reason"
    CLOSE_EXPECTED = "live.close_expected"
    TURN_COUNT = "live.turn_count"
    ERROR_CATEGORY = "live.error_category"

    # Tools
    TOOL_NAME = "live.tool_name"
    TOOL_CALL_ID = "live.tool_call_id"


class Metric:
    """Metric names recorded by the live client."""

    AUDIO_FRAMES = "genlive.audio_frames"
    TURNS = "genlive.turns"
    INTERRUPTIONS = "genlive.interruptions"


@dataclass
class Span:
    """Represents a telemetry span."""

    kind: SpanKind
    name: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:16])
    attributes: dict[str, Any] = field(default_factory=dict)
    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    end_time: datetime | None = None
    status: str = "ok"
    error_message: str | None = None

    @property
    def duration_ms(self) -> float | None:
        """Duration in milliseconds, or None if not yet ended."""
        if self.end_time is None:
            return None
        delta = self.end_time - self.start_time
        return delta.total_seconds() * 1000


class TelemetryProvider(ABC):
    """Abstract base class for telemetry providers.

    Providers collect span and metric data from live sessions.
    The default ``NoopTelemetryProvider`` has zero overhead.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for identification."""
        ...

    @abstractmethod
    def start_span(
        self,
        kind: SpanKind,
        name: str,
        *,
        attributes: dict[str, Any] | None = None,
    ) -> str:
        """Start a new telemetry span.

        Returns:
            A unique span ID string.
        """
        ...

    @abstractmethod
    def end_span(
        self,
        span_id: str,
        *,
        status: str = "ok",
        error_message: str | None = None,
        attributes: dict[str, Any] | None = None,
    ) -> None:
        """End a previously started span, merging *attributes* into it."""
        ...

    @abstractmethod
    def record_metric(self, name: str, value: float) -> None:
        """Record a metric value."""
        ...
