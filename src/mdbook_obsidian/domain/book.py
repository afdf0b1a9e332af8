"""Book tree and preprocessor envelope.

mdBook hands a preprocessor ``[context, book]`` as JSON on stdin and
expects the (possibly modified) book back on stdout. The book is kept
as plain JSON data so that every field this package does not touch
round-trips exactly; only ``Chapter.content`` is ever replaced.

Book item shapes::

    {"Chapter": {"name": ..., "content": ..., "sub_items": [...], ...}}
    "Separator"
    {"PartTitle": "..."}
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from mdbook_obsidian.domain.links import extract_wikilinks, rewrite_wikilinks

# mdBook 0.5 renamed ``sections`` to ``items``.
ITEM_KEYS = ("sections", "items")


class InputError(ValueError):
    """The serialized preprocessor input does not have the expected shape."""


class PreprocessorContext(BaseModel):
    """Build context passed by mdBook alongside the book.

    Only consulted to decide whether to run and to read the
    ``[preprocessor.<name>]`` table; never written back.
    """

    model_config = {"frozen": True, "extra": "allow"}

    root: str = ""
    config: dict[str, Any] = Field(default_factory=dict)
    renderer: str = ""
    mdbook_version: str = ""

    def preprocessor_table(self, name: str) -> dict[str, Any]:
        """Return ``config.preprocessor.<name>`` or an empty dict."""
        table = self.config.get("preprocessor", {})
        if not isinstance(table, dict):
            return {}
        section = table.get(name, {})
        return section if isinstance(section, dict) else {}


@dataclass
class WalkStats:
    """Counts collected while rewriting a book."""

    chapters: int = 0
    links: int = 0


def parse_input(raw: str) -> tuple[PreprocessorContext | None, dict[str, Any]]:
    """Split serialized preprocessor input into context and book.

    Accepts the mdBook array form ``[context, book]`` and the object form
    ``{"context": ..., "book": ...}`` (context optional).

    Raises:
        InputError: On invalid JSON or an unexpected envelope shape.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InputError(f"Input is not valid JSON: {exc}") from exc

    if isinstance(data, list):
        if len(data) != 2:
            raise InputError(f"Expected array of length 2, got {len(data)}")
        raw_context, book = data
    elif isinstance(data, dict) and "book" in data:
        raw_context, book = data.get("context"), data["book"]
    else:
        raise InputError("Unexpected input format: expected [context, book] or {'book': ...}")

    if not isinstance(book, dict):
        raise InputError(f"Book must be a JSON object, got {type(book).__name__}")

    context: PreprocessorContext | None = None
    if raw_context is not None:
        try:
            context = PreprocessorContext.model_validate(raw_context)
        except ValidationError as exc:
            raise InputError(f"Invalid preprocessor context: {exc}") from exc
    return context, book


def book_items(book: dict[str, Any]) -> list[Any]:
    """Return the top-level item list of *book*, or an empty list."""
    for key in ITEM_KEYS:
        items = book.get(key)
        if isinstance(items, list):
            return items
    return []


def _rewrite_item(item: Any, rewrite: Callable[[str], str], stats: WalkStats) -> None:
    if not isinstance(item, dict):
        return
    chapter = item.get("Chapter")
    if not isinstance(chapter, dict):
        return

    content = chapter.get("content")
    if isinstance(content, str):
        stats.chapters += 1
        stats.links += len(extract_wikilinks(content))
        chapter["content"] = rewrite(content)

    sub_items = chapter.get("sub_items")
    if isinstance(sub_items, list):
        for sub in sub_items:
            _rewrite_item(sub, rewrite, stats)


def rewrite_book(
    book: dict[str, Any],
    rewrite: Callable[[str], str] = rewrite_wikilinks,
) -> WalkStats:
    """Apply *rewrite* to every chapter's content, depth-first, in place.

    Separators, part titles, and all non-content fields are left as they
    are. Returns the number of chapters visited and wikilinks seen.
    """
    stats = WalkStats()
    for item in book_items(book):
        _rewrite_item(item, rewrite, stats)
    return stats
