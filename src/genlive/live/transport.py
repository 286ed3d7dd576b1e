"""Transport seam between the live client and the Gemini Live API."""

from __future__ import annotations

import contextlib
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from typing import Any

from genlive.config import LiveClientConfig
from genlive.errors import ConfigurationError
from genlive.live.audio import decode_payload
from genlive.models.messages import Part
from genlive.models.outbound import RealtimeChunk, ToolResponse

logger = logging.getLogger("genlive.live.transport")


class LiveChannel(ABC):
    """One open bidirectional session.

    ``receive`` yields raw server messages until the session ends.  It
    returns normally when the stream finishes and raises when the
    underlying connection is closed or fails; the error carries the close
    code and reason when the transport knows them.
    """

    @abstractmethod
    async def send_client_content(self, parts: Sequence[Part], *, turn_complete: bool) -> None:
        """Send one conversational content turn."""
        ...

    @abstractmethod
    async def send_realtime_input(self, chunk: RealtimeChunk) -> None:
        """Send one unframed media chunk."""
        ...

    @abstractmethod
    async def send_tool_response(self, response: ToolResponse) -> None:
        """Send function call results."""
        ...

    @abstractmethod
    def receive(self) -> AsyncIterator[Any]:
        """Iterate over inbound server messages."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close the session.  Must be safe to call more than once."""
        ...


class LiveTransport(ABC):
    """Factory for :class:`LiveChannel` instances."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Transport name for identification."""
        ...

    @abstractmethod
    async def open(self, model: str, config: Any) -> LiveChannel:
        """Establish a session; raises on handshake failure."""
        ...


class GenAILiveChannel(LiveChannel):
    """A ``google-genai`` ``AsyncSession`` plus the context manager that opened it."""

    def __init__(self, ctxmgr: Any, session: Any, types: Any) -> None:
        self._ctxmgr = ctxmgr
        self._session = session
        self._types = types
        self._closed = False

    def _to_genai_part(self, part: Part) -> Any:
        payload = part.model_dump(exclude_none=True)
        if part.inline_data is not None:
            payload["inline_data"] = self._types.Blob(
                data=decode_payload(part.inline_data.data),
                mime_type=part.inline_data.mime_type,
            )
        return self._types.Part.model_validate(payload)

    async def send_client_content(self, parts: Sequence[Part], *, turn_complete: bool) -> None:
        await self._session.send_client_content(
            turns=self._types.Content(
                role="user",
                parts=[self._to_genai_part(p) for p in parts],
            ),
            turn_complete=turn_complete,
        )

    async def send_realtime_input(self, chunk: RealtimeChunk) -> None:
        blob = self._types.Blob(data=decode_payload(chunk.data), mime_type=chunk.mime_type)
        if chunk.mime_type.startswith("audio/"):
            await self._session.send_realtime_input(audio=blob)
        elif chunk.mime_type.startswith(("image/", "video/")):
            await self._session.send_realtime_input(video=blob)
        else:
            await self._session.send_realtime_input(media=blob)

    async def send_tool_response(self, response: ToolResponse) -> None:
        await self._session.send_tool_response(
            function_responses=[
                self._types.FunctionResponse(id=fr.id, name=fr.name, response=fr.response)
                for fr in response.function_responses
            ],
        )

    async def receive(self) -> AsyncIterator[Any]:
        # live.receive() yields the messages of a single model turn and then
        # stops, so keep listening across turns.  A pass that yields nothing
        # means the socket has gone away.
        while True:
            received = False
            async for message in self._session.receive():
                received = True
                yield message
            if not received:
                logger.debug("Live receive stream ended")
                return

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        with contextlib.suppress(Exception):
            await self._ctxmgr.__aexit__(None, None, None)


class GenAITransport(LiveTransport):
    """Opens sessions through ``google.genai.Client.aio.live.connect``.

    Example:
        transport = GenAITransport(LiveClientConfig(api_key="..."))
        channel = await transport.open("models/gemini-2.0-flash-exp", {})
    """

    def __init__(self, config: LiveClientConfig) -> None:
        try:
            from google import genai as _genai
            from google.genai import types as _types
        except ImportError as exc:
            raise ImportError(
                "google-genai is required for GenAITransport. "
                "Install with: pip install google-genai"
            ) from exc

        if config.api_key is None or not config.api_key.get_secret_value():
            raise ConfigurationError("An API key is required to connect to the Live API")

        self._types = _types
        # Tighter WebSocket keepalive to detect dead connections faster
        self._client = _genai.Client(
            api_key=config.api_key.get_secret_value(),
            http_options=_types.HttpOptions(
                async_client_args={
                    "ping_interval": config.ping_interval,
                    "ping_timeout": config.ping_timeout,
                }
            ),
        )

    @property
    def name(self) -> str:
        return "GenAITransport"

    async def open(self, model: str, config: Any) -> LiveChannel:
        ctxmgr = self._client.aio.live.connect(model=model, config=config)
        session = await ctxmgr.__aenter__()
        logger.info("Live session opened for model %s", model)
        return GenAILiveChannel(ctxmgr, session, self._types)
