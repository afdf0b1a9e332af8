"""PreprocessService: the mdBook preprocessor protocol.

Two operations, matching how mdBook drives an external preprocessor:

- ``supports(renderer)``: answer ``mdbook-obsidian supports <renderer>``.
- ``run(raw)``: take the serialized ``[context, book]`` from stdin and
  return the book with every chapter's wiki links rewritten.

The book travels back in ``result.data["book"]``; the command layer is
the only place that writes it to stdout.
"""

from __future__ import annotations

import functools
import logging
from typing import Any

from pydantic import ValidationError

from mdbook_obsidian.config.discovery import PREPROCESSOR_NAME
from mdbook_obsidian.domain.book import InputError, PreprocessorContext, parse_input, rewrite_book
from mdbook_obsidian.domain.links import rewrite_wikilinks
from mdbook_obsidian.services.base import BaseService
from mdbook_obsidian.services.result import (
    INVALID_CONFIG,
    INVALID_INPUT,
    UNSUPPORTED_RENDERER,
    ServiceResult,
)
from mdbook_obsidian.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class PreprocessService(BaseService):
    """Rewrites wiki links across a whole book."""

    @traced
    def supports(self, renderer: str) -> ServiceResult:
        """Report whether this preprocessor should run for *renderer*."""
        unsupported = self._settings.links.unsupported_renderers
        if renderer in unsupported:
            logger.debug("Renderer %r is not supported", renderer)
            return ServiceResult.failed(
                "supports",
                UNSUPPORTED_RENDERER,
                f"Renderer not supported: {renderer}",
                renderer=renderer,
            )
        return ServiceResult(ok=True, op="supports", data={"renderer": renderer})

    @traced
    def run(self, raw: str) -> ServiceResult:
        """Parse *raw* input, rewrite every chapter, and return the book.

        Malformed input fails the whole run; nothing of the book is
        returned in that case.
        """
        op = "preprocess"
        with trace_span("parse"):
            try:
                context, book = parse_input(raw)
            except InputError as exc:
                logger.debug("Rejected preprocessor input: %s", exc)
                return ServiceResult.failed(op, INVALID_INPUT, str(exc))

        overrides: dict[str, Any] = {}
        if context is not None:
            overrides = context.preprocessor_table(PREPROCESSOR_NAME)
        try:
            links = self._links_config(overrides)
        except ValidationError as exc:
            return ServiceResult.failed(
                op,
                INVALID_CONFIG,
                f"Invalid [preprocessor.{PREPROCESSOR_NAME}] configuration",
                errors=exc.errors(include_url=False),
            )

        renderer = context.renderer if context is not None else ""
        if renderer and renderer in links.unsupported_renderers:
            logger.warning("Skipping link rewriting for unsupported renderer %r", renderer)
            return ServiceResult(
                ok=True,
                op=op,
                data={"book": book, "skipped": True, "renderer": renderer},
                warnings=[f"Renderer not supported, book passed through: {renderer}"],
            )

        self._log_context(context)
        rewrite = functools.partial(rewrite_wikilinks, extension=links.link_extension)
        with trace_span("rewrite") as span:
            stats = rewrite_book(book, rewrite)
            if span is not None:
                span.annotate("chapters", stats.chapters)
                span.annotate("links", stats.links)

        logger.debug("Rewrote %d links across %d chapters", stats.links, stats.chapters)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "book": book,
                "skipped": False,
                "renderer": renderer,
                "chapters": stats.chapters,
                "links": stats.links,
            },
        )

    @staticmethod
    def _log_context(context: PreprocessorContext | None) -> None:
        if context is None:
            logger.debug("No preprocessor context supplied")
            return
        logger.debug(
            "Preprocessing for renderer=%r mdbook=%s root=%s",
            context.renderer,
            context.mdbook_version or "unknown",
            context.root or ".",
        )
