"""Content aggregation and context assembly."""

from .assembler import build_research_context
from .loaders import (
    aggregate,
    format_documents_for_context,
    load_blog_documents,
    load_general_info,
    load_structured_records,
)
from .types import Document, DocumentMetadata, LoadResult

__all__ = [
    "Document",
    "DocumentMetadata",
    "LoadResult",
    "aggregate",
    "build_research_context",
    "format_documents_for_context",
    "load_blog_documents",
    "load_general_info",
    "load_structured_records",
]
