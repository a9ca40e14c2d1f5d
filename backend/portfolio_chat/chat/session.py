"""Client-side chat session state.

A session is either idle or awaiting a response. Messages are append-only and
at most one request is in flight at a time.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal, Protocol, Sequence

from portfolio_chat.chat.transport import ChatTransportError
from portfolio_chat.core.logging import get_logger
from portfolio_chat.utils.ids import new_id
from portfolio_chat.utils.time import utc_now

logger = get_logger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting-response"


@dataclass(frozen=True, slots=True)
class ConversationMessage:
    id: str
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = field(default_factory=utc_now)


class Transport(Protocol):
    def send(self, history: Sequence[dict[str, str]], question: str) -> str: ...


def error_reply(error: str) -> str:
    return f"Sorry, I encountered an error: {error}. Please make sure the API is configured correctly."


class ChatSession:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._messages: list[ConversationMessage] = []
        self._state = SessionState.IDLE
        self.last_error: str | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def messages(self) -> tuple[ConversationMessage, ...]:
        return tuple(self._messages)

    def history(self) -> list[dict[str, str]]:
        """Wire form of the turns preceding any in-flight question."""
        with self._lock:
            settled = self._messages[:-1] if self._state is SessionState.AWAITING_RESPONSE else self._messages
            return [{"role": message.role, "content": message.content} for message in settled]

    def submit(self, question: str) -> ConversationMessage | None:
        """Append the user's question and start waiting; ``None`` if rejected."""
        with self._lock:
            if self._state is SessionState.AWAITING_RESPONSE or not question.strip():
                return None
            message = ConversationMessage(id=new_id("user"), role="user", content=question)
            self._messages.append(message)
            self.last_error = None
            self._state = SessionState.AWAITING_RESPONSE
            return message

    def resolve(self, answer: str) -> ConversationMessage:
        return self._settle(ConversationMessage(id=new_id("assistant"), role="assistant", content=answer))

    def fail(self, error: str) -> ConversationMessage:
        message = ConversationMessage(id=new_id("assistant_error"), role="assistant", content=error_reply(error))
        return self._settle(message, error=error)

    def ask(self, question: str, transport: Transport) -> ConversationMessage | None:
        """Run one round trip; returns the assistant reply or ``None`` if not submitted."""
        if self.submit(question) is None:
            return None
        try:
            answer = transport.send(self.history(), question)
        except ChatTransportError as exc:
            logger.warning("Chat request failed: %s", exc)
            return self.fail(str(exc))
        except Exception as exc:
            logger.exception("Chat transport raised unexpectedly")
            return self.fail(str(exc) or "Failed to get response")
        return self.resolve(answer)

    def _settle(self, message: ConversationMessage, error: str | None = None) -> ConversationMessage:
        with self._lock:
            if self._state is not SessionState.AWAITING_RESPONSE:
                raise RuntimeError("No chat request is in flight")
            self._messages.append(message)
            if error is not None:
                self.last_error = error
            self._state = SessionState.IDLE
            return message


__all__ = ["SessionState", "ConversationMessage", "ChatSession", "Transport", "error_reply"]
