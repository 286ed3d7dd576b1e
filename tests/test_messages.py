"""Tests for inbound message decoding."""

from __future__ import annotations

from types import SimpleNamespace

from genlive.models.messages import (
    ServerContentMessage,
    SetupCompleteMessage,
    ToolCallCancellationMessage,
    ToolCallMessage,
    UnknownMessage,
    decode_server_message,
)


class TestDecodeKinds:
    def test_setup_complete(self) -> None:
        assert isinstance(decode_server_message({"setupComplete": {}}), SetupCompleteMessage)

    def test_tool_call(self) -> None:
        msg = decode_server_message(
            {
                "toolCall": {
                    "functionCalls": [
                        {"id": "call-1", "name": "get_weather", "args": {"city": "Paris"}}
                    ]
                }
            }
        )

        assert isinstance(msg, ToolCallMessage)
        assert msg.function_calls[0].id == "call-1"
        assert msg.function_calls[0].name == "get_weather"
        assert msg.function_calls[0].args == {"city": "Paris"}

    def test_tool_call_cancellation(self) -> None:
        msg = decode_server_message({"toolCallCancellation": {"ids": ["a", "b"]}})

        assert isinstance(msg, ToolCallCancellationMessage)
        assert msg.ids == ("a", "b")

    def test_server_content_fields_co_occur(self) -> None:
        msg = decode_server_message(
            {
                "serverContent": {
                    "turnComplete": True,
                    "inputTranscription": {"text": "hi"},
                    "outputTranscription": {"text": "hello"},
                    "modelTurn": {"parts": [{"text": "hello"}]},
                }
            }
        )

        assert isinstance(msg, ServerContentMessage)
        assert msg.turn_complete is True
        assert msg.interrupted is False
        assert msg.input_transcription == "hi"
        assert msg.output_transcription == "hello"
        assert msg.model_turn[0].text == "hello"

    def test_server_content_without_model_turn(self) -> None:
        msg = decode_server_message({"serverContent": {"interrupted": True}})

        assert msg.interrupted is True
        assert msg.model_turn is None

    def test_false_flags_are_not_signals(self) -> None:
        msg = decode_server_message(
            {"serverContent": {"interrupted": False, "turnComplete": False}}
        )

        assert isinstance(msg, ServerContentMessage)
        assert msg.interrupted is False
        assert msg.turn_complete is False

    def test_snake_case_keys(self) -> None:
        msg = decode_server_message(
            {"server_content": {"turn_complete": True, "input_transcription": {"text": "x"}}}
        )

        assert isinstance(msg, ServerContentMessage)
        assert msg.turn_complete is True
        assert msg.input_transcription == "x"

    def test_setup_takes_precedence(self) -> None:
        msg = decode_server_message({"setupComplete": {}, "serverContent": {"turnComplete": True}})
        assert isinstance(msg, SetupCompleteMessage)

    def test_pydantic_like_object(self) -> None:
        dumped = {"serverContent": {"outputTranscription": {"text": "hey"}}}
        raw = SimpleNamespace(model_dump=lambda **_: dumped)

        msg = decode_server_message(raw)

        assert isinstance(msg, ServerContentMessage)
        assert msg.output_transcription == "hey"


class TestDecodeUnknown:
    def test_unmatched_keys(self) -> None:
        msg = decode_server_message({"usageMetadata": {"totalTokenCount": 3}})

        assert isinstance(msg, UnknownMessage)
        assert msg.keys == ["usageMetadata"]
        assert msg.reason is None

    def test_not_a_mapping(self) -> None:
        msg = decode_server_message(42)

        assert isinstance(msg, UnknownMessage)
        assert msg.reason == "not a mapping"

    def test_malformed_known_shape(self) -> None:
        msg = decode_server_message({"toolCall": {"functionCalls": "nope"}})

        assert isinstance(msg, UnknownMessage)
        assert msg.reason.startswith("malformed payload")
