"""Server-side chat orchestration."""

from __future__ import annotations

from typing import Callable

from portfolio_chat.chat.completion import MODEL_LABEL, CompletionClient
from portfolio_chat.chat.prompt import build_messages
from portfolio_chat.content.assembler import build_research_context
from portfolio_chat.core.config import Settings
from portfolio_chat.core.errors import BlankQuestionError, CredentialNotConfiguredError
from portfolio_chat.core.logging import get_logger
from portfolio_chat.models.dto import ChatRequest, ChatResponse
from portfolio_chat.utils.time import iso_timestamp

logger = get_logger(__name__)

ClientFactory = Callable[[str], CompletionClient]


class ChatService:
    """Answer one chat request: context, prompt, completion.

    Stateless; content is re-read on every call.
    """

    def __init__(self, settings: Settings, client_factory: ClientFactory | None = None) -> None:
        self.settings = settings
        self._client_factory = client_factory or self._default_client

    def answer(self, request: ChatRequest) -> ChatResponse:
        api_key = self.settings.api_key
        if not api_key:
            raise CredentialNotConfiguredError()
        if not request.question.strip():
            raise BlankQuestionError()

        context = build_research_context(self.settings)
        messages = build_messages(context, request.messages, request.question)
        logger.info(
            "Answering research question",
            extra={"ctx_history": len(request.messages), "ctx_context_chars": len(context)},
        )
        text = self._client_factory(api_key).complete(messages)
        return ChatResponse(response=text, model=MODEL_LABEL, timestamp=iso_timestamp())

    def _default_client(self, api_key: str) -> CompletionClient:
        return CompletionClient(api_key=api_key, base_url=self.settings.provider_base_url)


__all__ = ["ChatService"]
