"""Split inline audio fragments out of a batch of content parts."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Iterable
from dataclasses import dataclass, field

from genlive.errors import AudioDecodeError
from genlive.models.messages import Part

DEFAULT_AUDIO_MIME_PREFIX = "audio/"


@dataclass(frozen=True)
class AudioFragment:
    data: bytes
    mime_type: str


@dataclass
class AudioExtraction:
    """Result of :func:`extract_audio`; each list keeps arrival order."""

    audio: list[AudioFragment] = field(default_factory=list)
    other_parts: list[Part] = field(default_factory=list)
    invalid: list[Part] = field(default_factory=list)
    """Audio-tagged parts whose payload could not be decoded."""


def decode_payload(data: bytes | str) -> bytes:
    """Return raw bytes for an inline payload (base64 text or bytes)."""
    if isinstance(data, bytes):
        return data
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AudioDecodeError(f"Invalid base64 payload: {exc}") from exc


def extract_audio(
    parts: Iterable[Part],
    *,
    mime_prefix: str = DEFAULT_AUDIO_MIME_PREFIX,
) -> AudioExtraction:
    """Partition *parts* into decoded audio fragments and everything else."""
    result = AudioExtraction()
    for part in parts:
        inline = part.inline_data
        if inline is None or not inline.mime_type.startswith(mime_prefix):
            result.other_parts.append(part)
            continue
        try:
            data = decode_payload(inline.data)
        except AudioDecodeError:
            result.invalid.append(part)
            continue
        result.audio.append(AudioFragment(data=data, mime_type=inline.mime_type))
    return result
