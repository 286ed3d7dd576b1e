"""Per-role accumulation of transcription deltas into whole messages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from genlive.live._helpers import Clock, utcnow
from genlive.models.enums import Role
from genlive.models.events import MessageEvent, ModelMessageEvent, UserMessageEvent

logger = logging.getLogger("genlive.live.transcription")


@dataclass(frozen=True)
class PendingTranscript:
    """Snapshot of an accumulating transcript (the ``Accumulating`` state)."""

    role: Role
    text: str
    started_at: datetime


class TranscriptionBuffer:
    """Turns streams of transcription deltas into one message per turn.

    Each role is a two-state machine: *Idle* (no slot) or *Accumulating*
    (text plus the arrival time of the first delta).  ``append`` moves Idle
    to Accumulating or extends the text; ``flush`` and ``clear`` return the
    role to Idle.

    Deltas are concatenated verbatim since upstream already carries the
    inter-token spacing; the only normalization is a strip at flush time.
    """

    def __init__(self, *, clock: Clock | None = None) -> None:
        self._clock = clock or utcnow
        self._pending: dict[Role, PendingTranscript] = {}

    def append(self, role: Role, text: str) -> PendingTranscript:
        """Add a delta for *role*, starting a transcript if none is active."""
        current = self._pending.get(role)
        if current is None:
            current = PendingTranscript(role=role, text=text, started_at=self._clock())
        else:
            current = PendingTranscript(
                role=role,
                text=current.text + text,
                started_at=current.started_at,
            )
        self._pending[role] = current
        return current

    def flush(self, role: Role) -> MessageEvent | None:
        """Emit the accumulated transcript for *role* and reset it.

        Returns ``None`` when nothing (or only whitespace) was accumulated;
        a turn boundary without speech never yields an empty message.
        """
        pending = self._pending.pop(role, None)
        if pending is None:
            return None
        text = pending.text.strip()
        if not text:
            return None
        logger.debug("Flushing %s transcript (%d chars)", role, len(text))
        if role is Role.USER:
            return UserMessageEvent(text=text, timestamp=pending.started_at)
        return ModelMessageEvent(text=text, timestamp=pending.started_at)

    def flush_all(self) -> list[MessageEvent]:
        """Flush the user transcript, then the model transcript."""
        events: list[MessageEvent] = []
        for role in (Role.USER, Role.MODEL):
            event = self.flush(role)
            if event is not None:
                events.append(event)
        return events

    def clear(self, role: Role | None = None) -> None:
        """Drop pending text without emitting it."""
        if role is None:
            self._pending.clear()
        else:
            self._pending.pop(role, None)

    def pending(self, role: Role) -> PendingTranscript | None:
        return self._pending.get(role)

    def is_idle(self, role: Role | None = None) -> bool:
        if role is None:
            return not self._pending
        return role not in self._pending
