"""Exception hierarchy and best-effort connection failure classification.

Classification is purely diagnostic: it picks the message an operator sees
and never changes what the client does next.
"""

from __future__ import annotations

from genlive.models.enums import ConnectionErrorCategory


class GenLiveError(Exception):
    """Base class for all genlive errors."""


class ConfigurationError(GenLiveError):
    """The client was constructed with an unusable configuration."""


class AudioDecodeError(GenLiveError):
    """An inline audio payload could not be decoded."""


_AUTH_MARKERS = (
    "api key",
    "api_key",
    "unauthorized",
    "unauthenticated",
    "invalid key",
    "authentication",
)
_PERMISSION_MARKERS = ("permission", "forbidden", "not allowed")
_QUOTA_MARKERS = ("quota", "resource_exhausted", "resource exhausted", "rate limit", "too many")
_NETWORK_MARKERS = ("network", "timeout", "timed out", "connection refused", "dns", "unreachable")

_STATUS_CATEGORIES = {
    401: ConnectionErrorCategory.AUTH,
    403: ConnectionErrorCategory.PERMISSION,
    429: ConnectionErrorCategory.QUOTA,
}

# WebSocket close codes (RFC 6455 §7.4.1)
_NORMAL_CLOSE_CODES = frozenset({1000, 1001})
_CLOSE_CATEGORIES = {
    1008: ConnectionErrorCategory.AUTH,
    1006: ConnectionErrorCategory.NETWORK,
    1014: ConnectionErrorCategory.NETWORK,
    1015: ConnectionErrorCategory.NETWORK,
}


def _status_code(exc: BaseException) -> int | None:
    """Find an HTTP-ish status code on a google-genai or websockets error."""
    for attr in ("code", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int):
        return value
    return None


def _classify_text(text: str) -> ConnectionErrorCategory | None:
    lowered = text.lower()
    if any(m in lowered for m in _QUOTA_MARKERS):
        return ConnectionErrorCategory.QUOTA
    if any(m in lowered for m in _PERMISSION_MARKERS):
        return ConnectionErrorCategory.PERMISSION
    if any(m in lowered for m in _AUTH_MARKERS):
        return ConnectionErrorCategory.AUTH
    if any(m in lowered for m in _NETWORK_MARKERS):
        return ConnectionErrorCategory.NETWORK
    return None


def classify_connection_error(exc: BaseException) -> ConnectionErrorCategory:
    """Classify a failure raised while establishing a session."""
    status = _status_code(exc)
    if status in _STATUS_CATEGORIES:
        return _STATUS_CATEGORIES[status]

    category = _classify_text(str(exc))
    if category is not None:
        return category

    if isinstance(exc, (OSError, TimeoutError)):
        return ConnectionErrorCategory.NETWORK
    return ConnectionErrorCategory.UNKNOWN


def classify_close(code: int | None, reason: str = "") -> ConnectionErrorCategory | None:
    """Classify a transport close.  Returns ``None`` for a normal closure."""
    if code in _NORMAL_CLOSE_CODES:
        return None
    category = _classify_text(reason) if reason else None
    if category is not None:
        return category
    if code is not None and code in _CLOSE_CATEGORIES:
        return _CLOSE_CATEGORIES[code]
    return ConnectionErrorCategory.UNKNOWN


def close_details(exc: BaseException | None) -> tuple[int | None, str]:
    """Extract ``(code, reason)`` from a transport close error.

    Understands ``websockets.ConnectionClosed`` (which keeps the received
    close frame on ``rcvd``) and any error exposing ``code``/``reason``.
    """
    if exc is None:
        return None, ""
    frame = getattr(exc, "rcvd", None)
    if frame is not None:
        return getattr(frame, "code", None), getattr(frame, "reason", "") or ""
    code = getattr(exc, "code", None)
    reason = getattr(exc, "reason", None)
    if isinstance(code, int) or isinstance(reason, str):
        return (code if isinstance(code, int) else None), reason or ""
    return None, str(exc)
