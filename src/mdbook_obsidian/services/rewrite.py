"""RewriteService: rewrite or inspect a single Markdown document."""

from __future__ import annotations

from dataclasses import asdict

from mdbook_obsidian.domain.links import extract_wikilinks, rewrite_wikilinks
from mdbook_obsidian.services.base import BaseService
from mdbook_obsidian.services.result import ServiceResult
from mdbook_obsidian.services.telemetry import traced


class RewriteService(BaseService):
    """Apply the chapter rewrite to free-standing text."""

    @traced
    def rewrite(self, content: str, *, source: str = "-") -> ServiceResult:
        extension = self._settings.links.link_extension
        rewritten = rewrite_wikilinks(content, extension=extension)
        return ServiceResult(
            ok=True,
            op="rewrite",
            data={
                "source": source,
                "content": rewritten,
                "changed": rewritten != content,
            },
        )

    @traced
    def list_links(self, content: str, *, source: str = "-") -> ServiceResult:
        """List parsed wiki links with the Markdown each becomes."""
        extension = self._settings.links.link_extension
        items = []
        for link in extract_wikilinks(content):
            item = asdict(link)
            item["markdown"] = link.to_markdown(extension)
            items.append(item)
        return ServiceResult(
            ok=True,
            op="list_links",
            data={"source": source, "count": len(items), "items": items},
        )
