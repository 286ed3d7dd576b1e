"""Shared test fixtures and helpers."""

from __future__ import annotations

import asyncio
import base64
from collections.abc import AsyncIterator, Callable, Coroutine
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from genlive.bus import EventBus
from genlive.config import LiveClientConfig
from genlive.live.client import LiveClient
from genlive.live.mock import MockLiveTransport
from genlive.models.enums import DiagnosticKind, EventType
from genlive.telemetry.mock import MockTelemetryProvider


class FakeClock:
    """Deterministic clock; each call returns the current instant."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def tick(self, seconds: float = 1.0) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


class EventRecorder:
    """Collects every event published on a bus, in order."""

    def __init__(self) -> None:
        self.events: list[Any] = []

    def __call__(self, event: Any) -> None:
        self.events.append(event)

    def of_type(self, event_type: EventType) -> list[Any]:
        return [e for e in self.events if e.type == event_type]

    def diagnostics(self, kind: DiagnosticKind | None = None) -> list[Any]:
        diags = self.of_type(EventType.DIAGNOSTIC)
        if kind is None:
            return diags
        return [d for d in diags if d.kind == kind]

    @property
    def types(self) -> list[EventType]:
        """Event types in order, without diagnostics."""
        return [e.type for e in self.events if e.type != EventType.DIAGNOSTIC]


@pytest.fixture
def advance() -> Callable[[int], Coroutine[Any, Any, None]]:
    """Yield control to let pending tasks run without real delay.

    Replaces ``await asyncio.sleep(0.05)`` patterns with zero-delay
    event loop yields::

        await advance()       # 5 yields (default)
        await advance(10)     # 10 yields for heavier workloads
    """

    async def _advance(n: int = 5) -> None:
        for _ in range(n):
            await asyncio.sleep(0)

    return _advance


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def transport() -> MockLiveTransport:
    return MockLiveTransport()


@pytest.fixture
def telemetry() -> MockTelemetryProvider:
    return MockTelemetryProvider()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
async def client(
    transport: MockLiveTransport,
    telemetry: MockTelemetryProvider,
    clock: FakeClock,
    recorder: EventRecorder,
) -> AsyncIterator[LiveClient]:
    client = LiveClient(
        LiveClientConfig(model="models/test-live"),
        transport=transport,
        telemetry=telemetry,
        clock=clock,
    )
    client.on_any(recorder)
    yield client
    await client.disconnect()


@pytest.fixture
async def connected(client: LiveClient) -> LiveClient:
    assert await client.connect()
    return client


# -- Wire message builders --


def server_content(**fields: Any) -> dict[str, Any]:
    return {"serverContent": fields}


def input_transcript(text: str) -> dict[str, Any]:
    return server_content(inputTranscription={"text": text})


def output_transcript(text: str) -> dict[str, Any]:
    return server_content(outputTranscription={"text": text})


def turn_complete() -> dict[str, Any]:
    return server_content(turnComplete=True)


def interrupted() -> dict[str, Any]:
    return server_content(interrupted=True)


def audio_part(data: bytes, mime_type: str = "audio/pcm;rate=24000") -> dict[str, Any]:
    return {"inlineData": {"mimeType": mime_type, "data": base64.b64encode(data).decode()}}


def model_turn(*parts: dict[str, Any]) -> dict[str, Any]:
    return server_content(modelTurn={"parts": list(parts)})
