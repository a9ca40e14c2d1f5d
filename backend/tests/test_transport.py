"""Tests for the HTTP chat transport."""

from __future__ import annotations

from typing import Any

import orjson
import pytest
import requests

from portfolio_chat.chat.transport import CHAT_PATH, ChatTransport, ChatTransportError, resolve_host


def make_response(status: int, body: bytes) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = body
    return resp


class FakeHttp:
    def __init__(self, response: requests.Response | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


def test_send_posts_history_and_question() -> None:
    http = FakeHttp(make_response(200, orjson.dumps({"response": "ok", "model": "m", "timestamp": "t"})))
    transport = ChatTransport("http://server:9000/", session=http)
    history = [{"role": "user", "content": "hi"}]
    assert transport.send(history, "next?") == "ok"
    [call] = http.calls
    assert call["url"] == f"http://server:9000{CHAT_PATH}"
    assert call["json"] == {"messages": history, "question": "next?"}
    assert call["timeout"] == 60


def test_error_payload_is_surfaced() -> None:
    http = FakeHttp(make_response(401, orjson.dumps({"error": "Invalid API Key", "message": "..."})))
    with pytest.raises(ChatTransportError, match="Invalid API Key"):
        ChatTransport("http://server", session=http).send([], "q")


def test_non_json_error_uses_status() -> None:
    http = FakeHttp(make_response(502, b"<html>bad gateway</html>"))
    with pytest.raises(ChatTransportError, match="HTTP error! status: 502"):
        ChatTransport("http://server", session=http).send([], "q")


def test_connection_errors_are_wrapped() -> None:
    http = FakeHttp(error=requests.ConnectionError("connection refused"))
    with pytest.raises(ChatTransportError, match="connection refused"):
        ChatTransport("http://server", session=http).send([], "q")


def test_malformed_success_payload() -> None:
    http = FakeHttp(make_response(200, b'{"unexpected": true}'))
    with pytest.raises(ChatTransportError, match="Malformed"):
        ChatTransport("http://server", session=http).send([], "q")


def test_resolve_host_prefers_override_then_env(monkeypatch: pytest.MonkeyPatch) -> None:
    assert resolve_host("http://a/") == "http://a"
    monkeypatch.setenv("PFCHAT_HOST", "http://b/")
    assert resolve_host(None) == "http://b"
    monkeypatch.delenv("PFCHAT_HOST")
    assert resolve_host(None) == "http://127.0.0.1:5173"
