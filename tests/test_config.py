"""Tests for LiveClientConfig and build_connect_config."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from genlive.config import DEFAULT_MODEL, LiveClientConfig, build_connect_config

types = pytest.importorskip("google.genai.types")


class TestLiveClientConfig:
    def test_defaults(self) -> None:
        config = LiveClientConfig()

        assert config.api_key is None
        assert config.model == DEFAULT_MODEL
        assert config.ping_interval == 10
        assert config.ping_timeout == 5
        assert config.flush_on_unexpected_close is False
        assert config.audio_mime_prefix == "audio/"

    def test_api_key_is_secret(self) -> None:
        config = LiveClientConfig(api_key="sk-test")

        assert config.api_key.get_secret_value() == "sk-test"
        assert "sk-test" not in repr(config)

    def test_invalid_type(self) -> None:
        with pytest.raises(ValidationError):
            LiveClientConfig(ping_interval="often")


class TestBuildConnectConfig:
    def test_defaults(self) -> None:
        config = build_connect_config()

        assert isinstance(config, types.LiveConnectConfig)
        assert config.response_modalities == [types.Modality.AUDIO]
        assert config.input_audio_transcription is not None
        assert config.output_audio_transcription is not None
        voice = config.speech_config.voice_config.prebuilt_voice_config.voice_name
        assert voice == "Aoede"
        assert config.tools is None

    def test_system_prompt_voice_language(self) -> None:
        config = build_connect_config(
            system_prompt="You are a calendar assistant.",
            voice="Puck",
            language="fr-FR",
            temperature=0.3,
        )

        assert config.system_instruction is not None
        assert config.speech_config.voice_config.prebuilt_voice_config.voice_name == "Puck"
        assert config.speech_config.language_code == "fr-FR"
        assert config.temperature == pytest.approx(0.3)

    def test_tools_become_function_declarations(self) -> None:
        config = build_connect_config(
            tools=[
                {
                    "name": "create_event",
                    "description": "Create a calendar event",
                    "parameters": {
                        "type": "OBJECT",
                        "properties": {"title": {"type": "STRING"}},
                    },
                },
                {"name": "list_events"},
            ]
        )

        names = [t.function_declarations[0].name for t in config.tools]
        assert names == ["create_event", "list_events"]

    def test_transcription_toggles(self) -> None:
        config = build_connect_config(
            voice=None,
            response_modalities=["TEXT"],
            input_transcription=False,
            output_transcription=False,
        )

        assert config.input_audio_transcription is None
        assert config.output_audio_transcription is None
        assert config.speech_config is None
        assert config.response_modalities == [types.Modality.TEXT]
