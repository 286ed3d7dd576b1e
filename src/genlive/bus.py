"""Publish/subscribe registry for live client events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

from genlive.models.enums import EventType
from genlive.models.events import ConversationEvent

EventCallback = Callable[[Any], Any]
"""Called with one event; may return an awaitable."""

logger = logging.getLogger("genlive.bus")


@dataclass
class _Subscription:
    sub_id: str
    event_type: EventType | None
    callback: EventCallback


class EventBus:
    """Ordered, in-process event fan-out.

    Subscribers are invoked in registration order and awaited one at a
    time, so every subscriber observes events in publication order.  A
    subscriber that raises is logged and skipped; it never prevents
    delivery to the others or propagates to the publisher.

    Example::

        bus = EventBus()
        sub_id = bus.subscribe(EventType.USER_MESSAGE, store.append)
        bus.subscribe(None, log_everything)  # all events
        ...
        bus.unsubscribe(sub_id)
    """

    def __init__(self) -> None:
        self._subscriptions: dict[str, _Subscription] = {}

    def subscribe(self, event_type: EventType | str | None, callback: EventCallback) -> str:
        """Register *callback* for one event type, or for every event when ``None``.

        Returns:
            A subscription ID that can be used to unsubscribe.
        """
        sub_id = uuid4().hex
        key = EventType(event_type) if event_type is not None else None
        self._subscriptions[sub_id] = _Subscription(sub_id, key, callback)
        return sub_id

    def unsubscribe(self, subscription_id: str) -> bool:
        """Remove a subscription.

        Returns:
            True if the subscription existed and was removed.
        """
        return self._subscriptions.pop(subscription_id, None) is not None

    def clear(self) -> None:
        self._subscriptions.clear()

    @property
    def subscription_count(self) -> int:
        """Return the number of active subscriptions."""
        return len(self._subscriptions)

    async def publish(self, event: ConversationEvent) -> None:
        """Deliver *event* to every matching subscriber."""
        # Snapshot so subscribers may (un)subscribe while being notified
        for sub in list(self._subscriptions.values()):
            if sub.event_type is not None and sub.event_type != event.type:
                continue
            if sub.sub_id not in self._subscriptions:
                continue
            try:
                result = sub.callback(event)
                if hasattr(result, "__await__"):
                    await result
            except Exception:
                logger.exception(
                    "Error in %s subscriber %s",
                    event.type,
                    sub.sub_id,
                )
