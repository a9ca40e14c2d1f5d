"""System prompt and message sequence assembly."""

from __future__ import annotations

from typing import Iterable

from portfolio_chat.core.errors import BlankQuestionError
from portfolio_chat.models.dto import ChatMessage

CONTEXT_DIVIDER = "=" * 60

PREAMBLE = """You are a research assistant answering questions about my research, projects, publications, and expertise.
You have access to detailed information about my work including blog posts, projects, and publications.
Answer questions based ONLY on the information provided below.
If you don't have specific information to answer a question, be honest about it.
Keep responses concise, helpful, and informative."""

GUIDELINES = """Important Guidelines:
- Only answer based on the provided research content
- If asked about something not mentioned in the content, say you don't have that specific information
- Be helpful and direct
- When referencing projects or publications, mention them by name
- Provide relevant details when available"""


def build_system_prompt(context: str) -> str:
    return (
        f"{PREAMBLE}\n\n"
        "MY RESEARCH AND WORK INFORMATION:\n"
        f"{CONTEXT_DIVIDER}\n"
        f"{context}\n"
        f"{CONTEXT_DIVIDER}\n\n"
        f"{GUIDELINES}"
    )


def build_messages(context: str, history: Iterable[ChatMessage], question: str) -> list[dict[str, str]]:
    """System message, then the caller's history verbatim, then the new question.

    History is trusted as given: consecutive same-role turns are passed through.
    """
    if not question.strip():
        raise BlankQuestionError()
    messages = [{"role": "system", "content": build_system_prompt(context)}]
    messages.extend({"role": message.role, "content": message.content} for message in history)
    messages.append({"role": "user", "content": question})
    return messages


__all__ = ["build_system_prompt", "build_messages"]
