"""Completion client for the Groq OpenAI-compatible chat endpoint.

One attempt per request: the SDK's own retries are disabled and no backoff is
applied. Provider failures are normalized into ``ProviderAuthenticationError``
or ``ProviderGenerationError`` so callers never see raw SDK exceptions.
"""

from __future__ import annotations

from typing import Any, Sequence

import openai

from portfolio_chat.core.errors import ProviderAuthenticationError, ProviderGenerationError
from portfolio_chat.core.logging import get_logger

logger = get_logger(__name__)

MODEL = "llama-3.1-8b-instant"
MODEL_LABEL = "llama-3.1-8b"
TEMPERATURE = 0.7
MAX_TOKENS = 500
FALLBACK_RESPONSE = "Sorry, I couldn't generate a response."


class CompletionClient:
    """Thin wrapper over ``openai.OpenAI`` with fixed sampling parameters."""

    def __init__(self, api_key: str, base_url: str, client: Any | None = None) -> None:
        if not api_key:
            raise ValueError("API key is required")
        self._client = client or openai.OpenAI(api_key=api_key, base_url=base_url, max_retries=0)

    def complete(self, messages: Sequence[dict[str, str]]) -> str:
        """Return the first choice's text, or ``FALLBACK_RESPONSE`` when there is none.

        Raises:
            ProviderAuthenticationError: The provider rejected the credential.
            ProviderGenerationError: Any other provider or transport failure.
        """
        try:
            response = self._client.chat.completions.create(
                model=MODEL,
                messages=list(messages),
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
            )
        except Exception as exc:
            status = getattr(exc, "status_code", None)
            logger.error("Completion request failed: %s", exc, extra={"ctx_status": status})
            if is_auth_failure(exc):
                raise ProviderAuthenticationError() from exc
            raise ProviderGenerationError(str(exc) or "Unknown error occurred") from exc

        choices = getattr(response, "choices", None) or []
        if not choices:
            return FALLBACK_RESPONSE
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        return content or FALLBACK_RESPONSE


def is_auth_failure(exc: BaseException) -> bool:
    if isinstance(exc, openai.AuthenticationError):
        return True
    if getattr(exc, "status_code", None) == 401:
        return True
    text = str(exc)
    return "401" in text or "unauthorized" in text.lower()


__all__ = [
    "MODEL",
    "MODEL_LABEL",
    "TEMPERATURE",
    "MAX_TOKENS",
    "FALLBACK_RESPONSE",
    "CompletionClient",
    "is_auth_failure",
]
