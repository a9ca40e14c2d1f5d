"""Assemble the bounded research context injected into the system prompt.

This path re-reads the content sources directly instead of reusing the
aggregated documents because each section applies its own truncation caps.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

import orjson

from portfolio_chat.content.loaders import (
    field_text,
    front_matter_fields,
    list_blog_files,
    split_front_matter,
)
from portfolio_chat.core.config import Settings
from portfolio_chat.core.logging import get_logger

logger = get_logger(__name__)

MAX_SECTION_ITEMS = 10
BLOG_EXCERPT_CHARS = 800
PERSONAL_INFO_CHARS = 1000
DIVIDER = "=" * 50
EMPTY_CONTEXT = "No research content available"


def build_research_context(settings: Settings) -> str:
    """Return the context string, or ``EMPTY_CONTEXT`` when no source is available."""
    sections: list[str] = []
    for name, builder in (
        ("blog", _blog_section),
        ("records", _records_sections),
        ("personal", _personal_section),
    ):
        sections.extend(_guarded(name, builder, settings))
    content = "".join(sections)
    return content or EMPTY_CONTEXT


def _guarded(name: str, builder: Callable[[Settings], list[str]], settings: Settings) -> list[str]:
    try:
        return builder(settings)
    except Exception as exc:
        logger.warning("Omitting %s section from context: %s", name, exc, extra={"ctx_source": name})
        return []


def _header(title: str, first: bool) -> str:
    lead = "" if first else "\n\n"
    return f"{lead}{title}:\n{DIVIDER}\n"


def _blog_section(settings: Settings) -> list[str]:
    if not settings.blog_dir.is_dir():
        return []
    parts = [_header("BLOG POSTS", first=True)]
    for path in list_blog_files(settings.blog_dir)[:MAX_SECTION_ITEMS]:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable blog file %s: %s", path, exc, extra={"ctx_source": "blog"})
            continue
        block, body = split_front_matter(text)
        title = front_matter_fields(block).get("title")
        if not isinstance(title, str) or not title.strip():
            title = path.stem
        parts.append(f"\n[BLOG] {title}\n{body[:BLOG_EXCERPT_CHARS]}\n...\n")
    return parts


def _records_sections(settings: Settings) -> list[str]:
    path = settings.collections_path
    if not path.is_file():
        return []
    data = orjson.loads(path.read_bytes())
    if not isinstance(data, Mapping):
        raise ValueError("collections file must contain an object")

    parts: list[str] = []
    projects = _items(data, "projects")
    if projects is not None:
        parts.append(_header("PROJECTS", first=False))
        for project in projects[:MAX_SECTION_ITEMS]:
            if not isinstance(project, Mapping):
                continue
            entry = f"\n[PROJECT] {field_text(project, 'name')} ({field_text(project, 'dates')})\n"
            entry += f"Description: {field_text(project, 'description')}\n"
            technologies = project.get("technologies")
            if isinstance(technologies, list):
                entry += f"Technologies: {', '.join(str(tech) for tech in technologies)}\n"
            parts.append(entry)

    publications = _items(data, "publications")
    if publications is not None:
        parts.append(_header("PUBLICATIONS", first=False))
        for publication in publications[:MAX_SECTION_ITEMS]:
            if not isinstance(publication, Mapping):
                continue
            parts.append(
                f"\n[PUBLICATION] {field_text(publication, 'name')}\n"
                f"Authors: {field_text(publication, 'authors')}\n"
                f"Date: {field_text(publication, 'dates')}\n"
                f"Description: {field_text(publication, 'description')}\n"
            )
    return parts


def _personal_section(settings: Settings) -> list[str]:
    path = settings.personal_path
    if not path.is_file():
        return []
    personal = orjson.loads(path.read_bytes())
    serialized = orjson.dumps(personal, option=orjson.OPT_INDENT_2).decode("utf-8")
    return [_header("PERSONAL INFORMATION", first=False), serialized[:PERSONAL_INFO_CHARS]]


def _items(data: Mapping[str, Any], key: str) -> list[Any] | None:
    collection = data.get(key)
    if not isinstance(collection, Mapping):
        return None
    items = collection.get("items")
    return items if isinstance(items, list) else None


__all__ = [
    "MAX_SECTION_ITEMS",
    "BLOG_EXCERPT_CHARS",
    "PERSONAL_INFO_CHARS",
    "DIVIDER",
    "EMPTY_CONTEXT",
    "build_research_context",
]
