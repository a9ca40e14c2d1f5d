"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from portfolio_chat.chat.service import ChatService
from portfolio_chat.core.config import Settings, get_settings


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def get_chat_service() -> ChatService:
    # Built per request; settings are the only shared state.
    return ChatService(settings=get_app_settings())


__all__ = [
    "get_app_settings",
    "get_chat_service",
]
