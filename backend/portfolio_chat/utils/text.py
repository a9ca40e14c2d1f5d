"""Text processing helpers."""

from __future__ import annotations

import re


WORD_SEPARATOR_RE = re.compile(r"[-_]")


def humanize(stem: str) -> str:
    """Turn a file stem such as ``my-first_post`` into ``my first post``."""
    return WORD_SEPARATOR_RE.sub(" ", stem)
