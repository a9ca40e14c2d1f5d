"""Common content data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

SourceCategory = Literal["project", "publication", "blog", "general"]


@dataclass(frozen=True, slots=True)
class DocumentMetadata:
    url: str | None = None
    date: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Document:
    """One unit of aggregated personal content."""

    id: str
    title: str
    content: str
    source: SourceCategory
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)


@dataclass(slots=True)
class LoadResult:
    """Outcome of reading a single content source.

    ``error`` is set when the source was unreadable or only partially parsed;
    ``documents`` then holds whatever could be salvaged.
    """

    source: str
    documents: list[Document] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


__all__ = ["SourceCategory", "DocumentMetadata", "Document", "LoadResult"]
