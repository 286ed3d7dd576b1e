"""Processing of server content messages into conversation events."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from genlive.bus import EventBus
from genlive.live._helpers import Clock, publish_all, publish_diagnostic, utcnow
from genlive.live.audio import DEFAULT_AUDIO_MIME_PREFIX, extract_audio
from genlive.live.transcription import TranscriptionBuffer
from genlive.models.enums import DiagnosticKind, Role
from genlive.models.events import (
    AudioFrameEvent,
    InterruptedEvent,
    ModelContentEvent,
    ModelMessageEvent,
    TurnCompleteEvent,
)
from genlive.models.messages import Part, ServerContentMessage
from genlive.telemetry.base import Metric, TelemetryProvider
from genlive.telemetry.noop import NoopTelemetryProvider

logger = logging.getLogger("genlive.live.content")


def _part_summary(part: Part) -> str:
    if part.text is not None:
        return "text"
    if part.inline_data is not None:
        return part.inline_data.mime_type or "inline_data"
    if part.executable_code is not None:
        return "executable_code"
    if part.code_execution_result is not None:
        return "code_execution_result"
    return "unknown"


def _no_session() -> Any:
    return None


class ContentStreamProcessor:
    """Handles every signal present in one server content message.

    The order is fixed:

    1. ``interrupted`` flushes both transcripts, publishes ``interrupted``
       and stops; nothing else in an aborted generation is meaningful.
    2. ``turn_complete`` flushes both transcripts, publishes
       ``turn-complete`` and continues.
    3. Input transcription text is appended to the user transcript.
    4. Output transcription text is appended to the model transcript.
    5. Model turn parts: every audio fragment becomes an ``audio-frame``
       immediately, in arrival order; remaining parts are published as
       ``model-content`` and their text as a ``model-message``.

    Because (2) runs before (3)/(4), deltas that share a message with a
    turn boundary belong to the *next* turn.

    ``current_session`` returns the handle of the open session.  When a
    subscriber closes that session part way through a message, the rest
    of the message is dropped.
    """

    def __init__(
        self,
        bus: EventBus,
        transcripts: TranscriptionBuffer,
        *,
        telemetry: TelemetryProvider | None = None,
        clock: Clock | None = None,
        audio_mime_prefix: str = DEFAULT_AUDIO_MIME_PREFIX,
        current_session: Callable[[], Any] | None = None,
    ) -> None:
        self._bus = bus
        self._transcripts = transcripts
        self._telemetry = telemetry or NoopTelemetryProvider()
        self._clock = clock or utcnow
        self._audio_mime_prefix = audio_mime_prefix
        self._current_session = current_session or _no_session

    async def process(self, content: ServerContentMessage) -> None:
        session = self._current_session()

        if content.interrupted:
            await self._flush_transcripts()
            self._telemetry.record_metric(Metric.INTERRUPTIONS, 1)
            if not self._is_current(session):
                return
            await publish_diagnostic(
                self._bus, logger, DiagnosticKind.SERVER_CONTENT, "interrupted"
            )
            await self._bus.publish(InterruptedEvent())
            return

        if content.turn_complete:
            await self._flush_transcripts()
            self._telemetry.record_metric(Metric.TURNS, 1)
            if not self._is_current(session):
                return
            await publish_diagnostic(
                self._bus, logger, DiagnosticKind.SERVER_CONTENT, "turnComplete"
            )
            await self._bus.publish(TurnCompleteEvent())

        if content.input_transcription and self._is_current(session):
            self._transcripts.append(Role.USER, content.input_transcription)
            await publish_diagnostic(
                self._bus,
                logger,
                DiagnosticKind.SERVER_INPUT_TRANSCRIPTION,
                content.input_transcription,
            )

        if content.output_transcription and self._is_current(session):
            self._transcripts.append(Role.MODEL, content.output_transcription)
            await publish_diagnostic(
                self._bus,
                logger,
                DiagnosticKind.SERVER_OUTPUT_TRANSCRIPTION,
                content.output_transcription,
            )

        if content.model_turn is not None and self._is_current(session):
            await self._process_model_turn(content.model_turn, session)

    def _is_current(self, session: Any) -> bool:
        return self._current_session() is session

    async def _flush_transcripts(self) -> None:
        await publish_all(self._bus, self._transcripts.flush_all())

    async def _process_model_turn(self, parts: Sequence[Part], session: Any) -> None:
        extraction = extract_audio(parts, mime_prefix=self._audio_mime_prefix)

        frames = 0
        for fragment in extraction.audio:
            if not self._is_current(session):
                break
            await self._bus.publish(
                AudioFrameEvent(data=fragment.data, mime_type=fragment.mime_type)
            )
            frames += 1
            await publish_diagnostic(
                self._bus,
                logger,
                DiagnosticKind.SERVER_AUDIO,
                f"buffer ({len(fragment.data)})",
            )
        if frames:
            self._telemetry.record_metric(Metric.AUDIO_FRAMES, frames)

        for part in extraction.invalid:
            mime_type = part.inline_data.mime_type if part.inline_data else ""
            await publish_diagnostic(
                self._bus,
                logger,
                DiagnosticKind.PROTOCOL_ANOMALY,
                f"undecodable audio part ({mime_type})",
                level=logging.WARNING,
            )

        if not extraction.other_parts or not self._is_current(session):
            return

        other = tuple(extraction.other_parts)
        await self._bus.publish(ModelContentEvent(parts=other))
        await publish_diagnostic(
            self._bus,
            logger,
            DiagnosticKind.SERVER_CONTENT,
            {"modelTurn": [_part_summary(p) for p in other]},
        )

        text = " ".join(p.text.strip() for p in other if p.text and p.text.strip())
        if text and self._is_current(session):
            await self._bus.publish(ModelMessageEvent(text=text, timestamp=self._clock()))
