"""Command: rewrite wiki links in a single Markdown file."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from mdbook_obsidian.commands._base import ObsidianCommand

if TYPE_CHECKING:
    from mdbook_obsidian.commands._context import AppContext


@click.command(
    cls=ObsidianCommand,
    examples="""\
  mdbook-obsidian rewrite src/chapter_1.md
  mdbook-obsidian rewrite --list src/chapter_1.md
  echo '[[intro#Getting Started]]' | mdbook-obsidian rewrite""",
)
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--list", "list_links", is_flag=True, help="List wiki links instead of rewriting.")
@click.pass_obj
def rewrite(app: AppContext, source: TextIO, list_links: bool) -> None:
    """Print SOURCE (default: stdin) with wiki links rewritten."""
    from mdbook_obsidian.services.rewrite import RewriteService

    svc = RewriteService(app.settings)
    content = source.read()
    name = getattr(source, "name", "-")

    if list_links:
        app.emit(svc.list_links(content, source=name))
        return
    result = svc.rewrite(content, source=name)
    app.emit(result, payload=result.data["content"])
