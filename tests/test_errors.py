"""Tests for connection failure and close classification."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from genlive.errors import classify_close, classify_connection_error, close_details
from genlive.models.enums import ConnectionErrorCategory


class _StatusError(Exception):
    def __init__(self, status_code: int, message: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code


class TestClassifyConnectionError:
    @pytest.mark.parametrize(
        ("status", "category"),
        [
            (401, ConnectionErrorCategory.AUTH),
            (403, ConnectionErrorCategory.PERMISSION),
            (429, ConnectionErrorCategory.QUOTA),
        ],
    )
    def test_status_codes(self, status: int, category: ConnectionErrorCategory) -> None:
        assert classify_connection_error(_StatusError(status)) is category

    def test_status_on_response(self) -> None:
        exc = Exception("failed")
        exc.response = SimpleNamespace(status_code=403)  # type: ignore[attr-defined]
        assert classify_connection_error(exc) is ConnectionErrorCategory.PERMISSION

    @pytest.mark.parametrize(
        ("message", "category"),
        [
            ("API key not valid. Please pass a valid API key.", ConnectionErrorCategory.AUTH),
            ("The caller does not have permission", ConnectionErrorCategory.PERMISSION),
            ("Quota exceeded for quota metric", ConnectionErrorCategory.QUOTA),
            ("Network is unreachable", ConnectionErrorCategory.NETWORK),
        ],
    )
    def test_message_text(self, message: str, category: ConnectionErrorCategory) -> None:
        assert classify_connection_error(RuntimeError(message)) is category

    def test_os_error_is_network(self) -> None:
        assert classify_connection_error(OSError("boom")) is ConnectionErrorCategory.NETWORK

    def test_timeout_is_network(self) -> None:
        assert classify_connection_error(TimeoutError()) is ConnectionErrorCategory.NETWORK

    def test_unknown(self) -> None:
        assert classify_connection_error(ValueError("odd")) is ConnectionErrorCategory.UNKNOWN


class TestClassifyClose:
    @pytest.mark.parametrize("code", [1000, 1001])
    def test_normal_close(self, code: int) -> None:
        assert classify_close(code, "bye") is None

    def test_policy_violation_is_auth(self) -> None:
        assert classify_close(1008, "") is ConnectionErrorCategory.AUTH

    def test_reason_text_wins_over_code(self) -> None:
        assert classify_close(1011, "You exceeded your current quota") is (
            ConnectionErrorCategory.QUOTA
        )

    @pytest.mark.parametrize("code", [1006, 1014, 1015])
    def test_network_codes(self, code: int) -> None:
        assert classify_close(code) is ConnectionErrorCategory.NETWORK

    def test_unknown(self) -> None:
        assert classify_close(1011, "internal error") is ConnectionErrorCategory.UNKNOWN
        assert classify_close(None) is ConnectionErrorCategory.UNKNOWN


class TestCloseDetails:
    def test_none(self) -> None:
        assert close_details(None) == (None, "")

    def test_websockets_style(self) -> None:
        exc = Exception("closed")
        exc.rcvd = SimpleNamespace(code=1008, reason="invalid key")  # type: ignore[attr-defined]
        assert close_details(exc) == (1008, "invalid key")

    def test_code_and_reason_attributes(self) -> None:
        exc = Exception("closed")
        exc.code = 1011  # type: ignore[attr-defined]
        exc.reason = "internal"  # type: ignore[attr-defined]
        assert close_details(exc) == (1011, "internal")

    def test_plain_error(self) -> None:
        assert close_details(RuntimeError("socket reset")) == (None, "socket reset")
