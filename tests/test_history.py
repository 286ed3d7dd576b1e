"""Tests for InMemoryConversationHistory."""

from __future__ import annotations

from genlive.bus import EventBus
from genlive.history import InMemoryConversationHistory
from genlive.live.client import LiveClient
from genlive.live.mock import MockLiveTransport
from genlive.models.enums import Role
from genlive.models.events import ModelMessageEvent, TurnCompleteEvent, UserMessageEvent
from tests.conftest import FakeClock, input_transcript, output_transcript, turn_complete


class TestHistory:
    async def test_records_messages_in_order(self, bus: EventBus, clock: FakeClock) -> None:
        history = InMemoryConversationHistory(bus)
        await bus.publish(UserMessageEvent(text="Hi", timestamp=clock.now))
        await bus.publish(TurnCompleteEvent())
        await bus.publish(ModelMessageEvent(text="Hello", timestamp=clock.tick()))

        assert [(m.role, m.content) for m in history.messages] == [
            (Role.USER, "Hi"),
            (Role.MODEL, "Hello"),
        ]
        assert history.messages[0].timestamp < history.messages[1].timestamp
        assert history.last_message.content == "Hello"

    async def test_ids_are_unique(self, bus: EventBus) -> None:
        history = InMemoryConversationHistory(bus)
        await bus.publish(UserMessageEvent(text="a"))
        await bus.publish(UserMessageEvent(text="b"))

        ids = {m.id for m in history.messages}
        assert len(ids) == 2

    async def test_clear_and_detach(self, bus: EventBus) -> None:
        history = InMemoryConversationHistory(bus)
        await bus.publish(UserMessageEvent(text="a"))
        history.clear()
        assert history.messages == []
        assert history.last_message is None

        history.detach()
        await bus.publish(UserMessageEvent(text="b"))
        assert history.messages == []

    async def test_messages_returns_copy(self, bus: EventBus) -> None:
        history = InMemoryConversationHistory(bus)
        await bus.publish(UserMessageEvent(text="a"))

        history.messages.clear()
        assert len(history.messages) == 1

    async def test_with_live_client(
        self, connected: LiveClient, transport: MockLiveTransport
    ) -> None:
        history = InMemoryConversationHistory(connected.events)

        await transport.channel.deliver(
            input_transcript("What time is it?"),
            output_transcript("It is noon."),
            turn_complete(),
        )

        assert [(m.role, m.content) for m in history.messages] == [
            (Role.USER, "What time is it?"),
            (Role.MODEL, "It is noon."),
        ]
