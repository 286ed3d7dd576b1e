"""Client configuration and Live connect-config construction."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, SecretStr

DEFAULT_MODEL = "models/gemini-2.0-flash-exp"
DEFAULT_VOICE = "Aoede"


class LiveClientConfig(BaseModel):
    """Live client configuration."""

    api_key: SecretStr | None = None
    model: str = DEFAULT_MODEL
    ping_interval: float = 10.0
    ping_timeout: float = 5.0
    flush_on_unexpected_close: bool = False
    """Emit pending transcripts when the transport drops without ``disconnect()``."""
    audio_mime_prefix: str = "audio/"


def build_connect_config(
    *,
    system_prompt: str | None = None,
    voice: str | None = DEFAULT_VOICE,
    language: str | None = None,
    tools: list[dict[str, Any]] | None = None,
    response_modalities: list[str] | None = None,
    temperature: float | None = None,
    input_transcription: bool = True,
    output_transcription: bool = True,
) -> Any:
    """Build a ``google.genai.types.LiveConnectConfig``.

    ``tools`` are plain function declarations
    (``{"name": ..., "description": ..., "parameters": {...}}``); each one
    becomes its own ``types.Tool``.
    """
    from google.genai import types

    config: dict[str, Any] = {
        "response_modalities": response_modalities or ["AUDIO"],
    }
    if input_transcription:
        config["input_audio_transcription"] = types.AudioTranscriptionConfig()
    if output_transcription:
        config["output_audio_transcription"] = types.AudioTranscriptionConfig()

    # --- Voice / language ---
    speech_kwargs: dict[str, Any] = {}
    if voice:
        speech_kwargs["voice_config"] = types.VoiceConfig(
            prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice)
        )
    if language:
        speech_kwargs["language_code"] = language
    if speech_kwargs:
        config["speech_config"] = types.SpeechConfig(**speech_kwargs)

    if system_prompt:
        config["system_instruction"] = system_prompt

    if temperature is not None:
        config["temperature"] = temperature

    # --- Tools ---
    if tools:
        config["tools"] = [
            types.Tool(
                function_declarations=[
                    types.FunctionDeclaration(
                        name=tool.get("name", ""),
                        description=tool.get("description", ""),
                        parameters=tool.get("parameters"),
                    )
                ]
            )
            for tool in tools
        ]

    return types.LiveConnectConfig(**config)
