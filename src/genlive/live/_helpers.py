"""Internal helpers shared by the live session components."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Any

from genlive.bus import EventBus
from genlive.models.enums import DiagnosticKind
from genlive.models.events import ConversationEvent, DiagnosticEvent, DiagnosticRecord

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(UTC)


async def publish_diagnostic(
    bus: EventBus,
    logger: logging.Logger,
    kind: DiagnosticKind,
    message: Any,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Log a diagnostic and publish it on the bus."""
    logger.log(level, "[%s] %s", kind, message)
    await bus.publish(DiagnosticEvent(DiagnosticRecord(kind=kind, message=message, level=level)))


async def publish_all(bus: EventBus, events: Iterable[ConversationEvent]) -> None:
    for event in events:
        await bus.publish(event)
