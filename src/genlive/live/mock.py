"""Mock live transport and channel for testing."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from genlive.live.transport import LiveChannel, LiveTransport
from genlive.models.messages import Part
from genlive.models.outbound import RealtimeChunk, ToolResponse


@dataclass
class MockCall:
    """Record of a method call for test assertions."""

    method: str
    args: dict[str, Any] = field(default_factory=dict)


class MockConnectionClosed(Exception):
    """Raised from :meth:`MockLiveChannel.receive` to simulate a dropped socket."""

    def __init__(self, code: int | None, reason: str = "") -> None:
        super().__init__(f"connection closed: {code} {reason}".strip())
        self.code = code
        self.reason = reason


_END = object()


class MockLiveChannel(LiveChannel):
    """In-memory session driven by the test.

    Example:
        await channel.deliver({"setupComplete": {}})
        await channel.drop(1011, "internal error")
    """

    def __init__(self) -> None:
        self.calls: list[MockCall] = []
        self.closed = False
        self.fail_sends_with: Exception | None = None
        self._inbound: asyncio.Queue[Any] = asyncio.Queue()

    @property
    def sent(self) -> list[MockCall]:
        """Recorded send calls (everything except ``close``)."""
        return [c for c in self.calls if c.method != "close"]

    async def send_client_content(self, parts: Sequence[Part], *, turn_complete: bool) -> None:
        self._check_send()
        self.calls.append(
            MockCall(
                method="send_client_content",
                args={"parts": list(parts), "turn_complete": turn_complete},
            )
        )

    async def send_realtime_input(self, chunk: RealtimeChunk) -> None:
        self._check_send()
        self.calls.append(MockCall(method="send_realtime_input", args={"chunk": chunk}))

    async def send_tool_response(self, response: ToolResponse) -> None:
        self._check_send()
        self.calls.append(MockCall(method="send_tool_response", args={"response": response}))

    async def receive(self) -> AsyncIterator[Any]:
        while True:
            item = await self._inbound.get()
            try:
                if item is _END:
                    return
                if isinstance(item, BaseException):
                    raise item
                yield item
            finally:
                self._inbound.task_done()

    async def close(self) -> None:
        if not self.closed:
            self.closed = True
            self.calls.append(MockCall(method="close"))

    # -- Test helpers --

    async def deliver(self, *messages: Any) -> None:
        """Feed inbound messages and wait until the receive loop handled them."""
        for message in messages:
            self._inbound.put_nowait(message)
        await self._inbound.join()

    async def drop(self, code: int | None = 1006, reason: str = "") -> None:
        """Simulate the server or network closing the connection."""
        self._inbound.put_nowait(MockConnectionClosed(code, reason))
        await self._inbound.join()

    async def end(self) -> None:
        """Finish the receive stream without an error."""
        self._inbound.put_nowait(_END)
        await self._inbound.join()

    def _check_send(self) -> None:
        if self.fail_sends_with is not None:
            raise self.fail_sends_with


class MockLiveTransport(LiveTransport):
    """Mock transport handing out :class:`MockLiveChannel` instances.

    ``fail_with`` makes the next ``open`` raise; ``gate`` holds ``open``
    until the event is set, leaving the client in CONNECTING.
    """

    def __init__(self) -> None:
        self.calls: list[MockCall] = []
        self.channels: list[MockLiveChannel] = []
        self.fail_with: Exception | None = None
        self.gate: asyncio.Event | None = None

    @property
    def name(self) -> str:
        return "MockLiveTransport"

    @property
    def channel(self) -> MockLiveChannel:
        """The most recently opened channel."""
        return self.channels[-1]

    async def open(self, model: str, config: Any) -> LiveChannel:
        self.calls.append(MockCall(method="open", args={"model": model, "config": config}))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            exc, self.fail_with = self.fail_with, None
            raise exc
        channel = MockLiveChannel()
        self.channels.append(channel)
        return channel
