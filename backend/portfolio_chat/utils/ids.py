"""ID helpers."""

from __future__ import annotations

import uuid


def new_id(prefix: str | None = None) -> str:
    """Generate a random UUID4 string with optional prefix."""
    base = uuid.uuid4().hex
    return f"{prefix}_{base}" if prefix else base


def document_id(category: str, natural_key: str) -> str:
    """Deterministic identifier for a document derived from its category and key."""
    return f"{category}_{natural_key}"
