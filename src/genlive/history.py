"""In-memory conversation history built from message events."""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field

from genlive.bus import EventBus
from genlive.models.enums import EventType, Role
from genlive.models.events import MessageEvent


class ConversationMessage(BaseModel):
    """One stored utterance."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    role: Role
    content: str
    timestamp: datetime


class InMemoryConversationHistory:
    """List-based history for development and testing.

    Subscribes to ``user-message`` and ``model-message`` on construction
    and stores them in arrival order, which for a single session equals
    the order the conversation happened in.
    """

    def __init__(self, bus: EventBus) -> None:
        self._bus = bus
        self._messages: list[ConversationMessage] = []
        self._subscriptions = [
            bus.subscribe(EventType.USER_MESSAGE, self._on_message),
            bus.subscribe(EventType.MODEL_MESSAGE, self._on_message),
        ]

    @property
    def messages(self) -> list[ConversationMessage]:
        return list(self._messages)

    @property
    def last_message(self) -> ConversationMessage | None:
        return self._messages[-1] if self._messages else None

    def clear(self) -> None:
        self._messages.clear()

    def detach(self) -> None:
        """Stop recording.  Already stored messages are kept."""
        for sub_id in self._subscriptions:
            self._bus.unsubscribe(sub_id)
        self._subscriptions = []

    def _on_message(self, event: MessageEvent) -> None:
        self._messages.append(
            ConversationMessage(role=event.role, content=event.text, timestamp=event.timestamp)
        )
