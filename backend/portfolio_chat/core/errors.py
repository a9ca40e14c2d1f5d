"""Error types surfaced by the chat endpoint."""

from __future__ import annotations

from typing import Any


class ConfigError(ValueError):
    """Raised when a config file contains an invalid or forbidden value."""


class ChatError(Exception):
    """Base class for failures reported to chat clients as structured JSON."""

    status_code: int = 500
    error: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message
        super().__init__(message or self.error)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        return payload


class CredentialNotConfiguredError(ChatError):
    """The completion provider credential is missing from the environment."""

    status_code = 500
    error = "GROQ_API_KEY not configured"

    def __init__(self) -> None:
        super().__init__(
            "Please set GROQ_API_KEY in the server environment. "
            "Get a free key at https://console.groq.com/keys"
        )


class BlankQuestionError(ChatError):
    status_code = 400
    error = "Question is required"

    def __init__(self) -> None:
        super().__init__(None)


class ProviderAuthenticationError(ChatError):
    """The completion provider rejected the credential."""

    status_code = 401
    error = "Invalid API Key"

    def __init__(self) -> None:
        super().__init__(
            "Your Groq API key is invalid. "
            "Please get a free key from https://console.groq.com/keys"
        )


class ProviderGenerationError(ChatError):
    """Any other failure raised by the completion provider."""

    status_code = 500
    error = "Failed to generate response"


__all__ = [
    "ConfigError",
    "ChatError",
    "CredentialNotConfiguredError",
    "BlankQuestionError",
    "ProviderAuthenticationError",
    "ProviderGenerationError",
]
