"""Pydantic DTOs exposed via API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(default_factory=list, description="Prior conversation turns")
    question: str = Field(default="", description="New question to answer")

    @field_validator("question", mode="before")
    @classmethod
    def _null_question_is_blank(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("messages", mode="before")
    @classmethod
    def _null_messages_is_empty(cls, value: object) -> object:
        return [] if value is None else value


class ChatResponse(BaseModel):
    response: str
    model: str
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
    message: str | None = None


__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
]
