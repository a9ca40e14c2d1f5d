"""HTTP transport used by client-side chat sessions."""

from __future__ import annotations

import os
from typing import Any, Optional, Sequence

import requests

DEFAULT_HOST = "http://127.0.0.1:5173"
CHAT_PATH = "/api/research-chat"


class ChatTransportError(RuntimeError):
    """Raised when a chat round trip fails for any reason."""


def resolve_host(override: Optional[str] = None) -> str:
    if override:
        return override.rstrip("/")
    env_host = os.environ.get("PFCHAT_HOST")
    if env_host:
        return env_host.rstrip("/")
    return DEFAULT_HOST


class ChatTransport:
    """POSTs a question plus prior turns to the research chat endpoint."""

    def __init__(
        self,
        host: Optional[str] = None,
        timeout: float = 60,
        session: requests.Session | None = None,
    ) -> None:
        self.url = f"{resolve_host(host)}{CHAT_PATH}"
        self.timeout = timeout
        self._http = session or requests.Session()

    def send(self, history: Sequence[dict[str, str]], question: str) -> str:
        body = {"messages": list(history), "question": question}
        try:
            resp = self._http.post(self.url, json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ChatTransportError(str(exc) or "Failed to get response") from exc
        if not resp.ok:
            raise ChatTransportError(_error_detail(resp))
        try:
            payload: Any = resp.json()
        except ValueError as exc:
            raise ChatTransportError("Malformed response from chat endpoint") from exc
        if not isinstance(payload, dict) or not isinstance(payload.get("response"), str):
            raise ChatTransportError("Malformed response from chat endpoint")
        return payload["response"]


def _error_detail(resp: requests.Response) -> str:
    fallback = f"HTTP error! status: {resp.status_code}"
    try:
        payload = resp.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return fallback


__all__ = ["ChatTransport", "ChatTransportError", "resolve_host", "DEFAULT_HOST", "CHAT_PATH"]
