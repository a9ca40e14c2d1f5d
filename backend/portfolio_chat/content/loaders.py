"""Loaders that turn on-disk portfolio content into documents."""

from __future__ import annotations

from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable

import orjson
import yaml

from portfolio_chat.content.types import Document, DocumentMetadata, LoadResult
from portfolio_chat.core.config import Settings
from portfolio_chat.core.logging import get_logger
from portfolio_chat.utils.ids import document_id
from portfolio_chat.utils.text import humanize

logger = get_logger(__name__)

BLOG_SUFFIXES: tuple[str, ...] = (".mdx", ".md", ".markdown")
FRONT_MATTER_DELIMITER = "---"
NOT_AVAILABLE = "N/A"


class BaseLoader:
    """Common loader interface.

    ``load`` may raise; ``run`` never does and reports failures on the result.
    """

    source: str = "unknown"

    def load(self, settings: Settings) -> LoadResult:  # pragma: no cover - interface
        raise NotImplementedError

    def run(self, settings: Settings) -> LoadResult:
        try:
            result = self.load(settings)
        except Exception as exc:
            logger.warning(
                "Failed to load %s content: %s",
                self.source,
                exc,
                extra={"ctx_source": self.source},
            )
            return LoadResult(source=self.source, error=str(exc))
        if result.error:
            logger.warning(
                "Loaded %s content with errors: %s",
                self.source,
                result.error,
                extra={"ctx_source": self.source},
            )
        return result


class BlogLoader(BaseLoader):
    source = "blog"

    def load(self, settings: Settings) -> LoadResult:
        result = LoadResult(source=self.source)
        failed: list[str] = []
        for path in list_blog_files(settings.blog_dir):
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning(
                    "Skipping unreadable blog file %s: %s",
                    path,
                    exc,
                    extra={"ctx_source": self.source, "ctx_path": str(path)},
                )
                failed.append(path.name)
                continue
            result.documents.append(_blog_document(path, text))
        if failed:
            result.error = f"unreadable blog files: {', '.join(failed)}"
        return result


class RecordsLoader(BaseLoader):
    """Projects and publications from the collections record file."""

    source = "records"

    def load(self, settings: Settings) -> LoadResult:
        result = LoadResult(source=self.source)
        path = settings.collections_path
        if not path.is_file():
            logger.debug("No collections file at %s", path)
            return result
        data = orjson.loads(path.read_bytes())
        if not isinstance(data, Mapping):
            result.error = "collections file must contain an object"
            return result

        skipped = 0
        for record in _collection_items(data, "projects"):
            if _has_name(record):
                result.documents.append(_project_document(record))
            else:
                skipped += 1
        for record in _collection_items(data, "publications"):
            if _has_name(record):
                result.documents.append(_publication_document(record))
            else:
                skipped += 1
        if skipped:
            result.error = f"skipped {skipped} malformed record(s)"
        return result


class GeneralInfoLoader(BaseLoader):
    source = "general"

    def load(self, settings: Settings) -> LoadResult:
        result = LoadResult(source=self.source)
        path = settings.personal_path
        if not path.is_file():
            logger.debug("No personal info file at %s", path)
            return result
        personal_text = path.read_text(encoding="utf-8")
        # Validate only; the raw text is what gets embedded.
        orjson.loads(personal_text)
        content = (
            f"Website: {settings.site_url}\n"
            f"Last Updated: {settings.site_last_updated}\n\n"
            f"{personal_text}"
        )
        result.documents.append(
            Document(
                id="site_info",
                title="Site Information",
                content=content,
                source="general",
                metadata=DocumentMetadata(url=settings.site_url, tags=("general", "about")),
            )
        )
        return result


class LoaderRegistry:
    """Ordered set of loaders whose outputs are concatenated."""

    def __init__(self) -> None:
        self._loaders: list[BaseLoader] = [
            BlogLoader(),
            RecordsLoader(),
            GeneralInfoLoader(),
        ]

    def load_all(self, settings: Settings) -> list[LoadResult]:
        """Run every loader concurrently; results keep registration order."""
        with ThreadPoolExecutor(max_workers=len(self._loaders), thread_name_prefix="content-loader") as pool:
            futures = [pool.submit(loader.run, settings) for loader in self._loaders]
            return [future.result() for future in futures]

    def aggregate(self, settings: Settings) -> list[Document]:
        documents: list[Document] = []
        for result in self.load_all(settings):
            documents.extend(result.documents)
        logger.debug("Aggregated %s documents", len(documents))
        return documents


def load_blog_documents(settings: Settings) -> LoadResult:
    return BlogLoader().run(settings)


def load_structured_records(settings: Settings) -> LoadResult:
    return RecordsLoader().run(settings)


def load_general_info(settings: Settings) -> LoadResult:
    return GeneralInfoLoader().run(settings)


def aggregate(settings: Settings) -> list[Document]:
    """Blog posts, then projects and publications, then general info."""
    return LoaderRegistry().aggregate(settings)


def format_documents_for_context(documents: Iterable[Document]) -> str:
    return "\n".join(
        f"[{doc.source.upper()}] {doc.title}\n{'-' * 50}\n{doc.content}\n" for doc in documents
    )


def list_blog_files(blog_dir: Path) -> list[Path]:
    """Recognized blog files in stable (sorted) order; empty when the directory is absent."""
    if not blog_dir.is_dir():
        return []
    return sorted(
        path for path in blog_dir.iterdir() if path.is_file() and path.suffix.lower() in BLOG_SUFFIXES
    )


def split_front_matter(text: str) -> tuple[str, str]:
    """Split ``text`` into its front-matter block and body.

    The block must open with a ``---`` line at the very start and close with
    another ``---`` line. Without one the whole text is body.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != FRONT_MATTER_DELIMITER:
        return "", text
    for index in range(1, len(lines)):
        if lines[index].rstrip("\r\n") == FRONT_MATTER_DELIMITER:
            block = "".join(lines[1:index])
            if block.endswith("\r\n"):
                block = block[:-2]
            elif block.endswith("\n"):
                block = block[:-1]
            return block, "".join(lines[index + 1 :])
    return "", text


def front_matter_fields(block: str) -> dict[str, Any]:
    if not block.strip():
        return {}
    try:
        fields = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        logger.debug("Ignoring unparseable front-matter: %s", exc)
        return {}
    return fields if isinstance(fields, dict) else {}


def _blog_document(path: Path, text: str) -> Document:
    block, body = split_front_matter(text)
    fields = front_matter_fields(block)
    date = fields.get("publishedAt") or fields.get("date")
    return Document(
        id=document_id("blog", path.name),
        title=humanize(path.stem),
        content=f"{block}\n\n{body}",
        source="blog",
        metadata=DocumentMetadata(
            date=str(date) if date is not None else None,
            tags=("blog", path.stem),
        ),
    )


def _collection_items(data: Mapping[str, Any], key: str) -> list[Any]:
    collection = data.get(key)
    if not isinstance(collection, Mapping):
        return []
    items = collection.get("items")
    return items if isinstance(items, list) else []


def _has_name(record: Any) -> bool:
    return isinstance(record, Mapping) and record.get("name") not in (None, "")


def field_text(record: Mapping[str, Any], key: str) -> str:
    value = record.get(key)
    if value is None or value == "" or value == []:
        return NOT_AVAILABLE
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


def _technologies(record: Mapping[str, Any]) -> list[str]:
    value = record.get("technologies")
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def _project_document(record: Mapping[str, Any]) -> Document:
    name = str(record["name"])
    technologies = _technologies(record)
    content = (
        f"Title: {name}\n"
        f"Dates: {field_text(record, 'dates')}\n"
        f"Description: {field_text(record, 'description')}\n"
        f"Technologies: {', '.join(technologies) or NOT_AVAILABLE}"
    )
    return Document(
        id=document_id("project", name),
        title=name,
        content=content,
        source="project",
        metadata=DocumentMetadata(
            url=record.get("href") if isinstance(record.get("href"), str) else None,
            date=record.get("dates") if isinstance(record.get("dates"), str) else None,
            tags=("project", *technologies),
        ),
    )


def _publication_document(record: Mapping[str, Any]) -> Document:
    name = str(record["name"])
    content = (
        f"Title: {name}\n"
        f"Authors: {field_text(record, 'authors')}\n"
        f"Dates: {field_text(record, 'dates')}\n"
        f"Description: {field_text(record, 'description')}"
    )
    return Document(
        id=document_id("publication", name),
        title=name,
        content=content,
        source="publication",
        metadata=DocumentMetadata(
            url=record.get("href") if isinstance(record.get("href"), str) else None,
            date=record.get("dates") if isinstance(record.get("dates"), str) else None,
            tags=("publication", "research"),
        ),
    )


__all__ = [
    "BLOG_SUFFIXES",
    "BaseLoader",
    "BlogLoader",
    "RecordsLoader",
    "GeneralInfoLoader",
    "LoaderRegistry",
    "load_blog_documents",
    "load_structured_records",
    "load_general_info",
    "aggregate",
    "format_documents_for_context",
    "list_blog_files",
    "split_front_matter",
    "front_matter_fields",
    "field_text",
]
